"""
Booking lifecycle.

New bookings always start as ``pending``.  Status changes only through
``update_booking_status``, which overwrites unconditionally: there is no
transition table, so any status may follow any other (including itself).
Cancelling has no side effects on routes or vehicles.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .entities import (
    Booking,
    InputValidationError,
    MarketplaceError,
    NotFoundError,
)
from .enums import BookingStatus
from .store import MarketplaceStore
from .validators import validate_booking_references

logger = logging.getLogger(__name__)


async def create_booking(
    store: MarketplaceStore,
    *,
    service_id: int,
    route_id: int,
    customer_name: str,
    customer_phone: str,
    pickup_time: datetime,
    passenger_count: int,
    vehicle_id: Optional[int] = None,
    notes: Optional[str] = None,
) -> Booking:
    if passenger_count < 1:
        raise InputValidationError("passenger_count", "must be at least 1")

    try:
        await validate_booking_references(
            store, service_id=service_id, route_id=route_id, vehicle_id=vehicle_id
        )
    except MarketplaceError as exc:
        logger.warning("Booking rejected: %s", exc)
        raise

    booking = await store.insert_booking(
        service_id=service_id,
        route_id=route_id,
        vehicle_id=vehicle_id,
        customer_name=customer_name,
        customer_phone=customer_phone,
        pickup_time=pickup_time,
        passenger_count=passenger_count,
        notes=notes or None,
        status=BookingStatus.PENDING,
    )
    logger.info(
        "Created booking %d (service=%d route=%d vehicle=%s)",
        booking.id,
        service_id,
        route_id,
        vehicle_id,
    )
    return booking


async def update_booking_status(
    store: MarketplaceStore, booking_id: int, status: BookingStatus
) -> Booking:
    booking = await store.set_booking_status(booking_id, BookingStatus(status))
    if booking is None:
        logger.warning("Status update for unknown booking %d", booking_id)
        raise NotFoundError("Booking", booking_id)
    logger.info("Booking %d -> %s", booking_id, booking.status.value)
    return booking


async def list_bookings(
    store: MarketplaceStore, service_id: Optional[int] = None
) -> list[Booking]:
    return await store.list_bookings(service_id)
