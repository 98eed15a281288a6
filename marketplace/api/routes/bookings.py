"""
Booking endpoints
=================

POST  /api/v1/bookings                     -- create a booking (starts pending)
PATCH /api/v1/bookings/{booking_id}/status -- overwrite the booking status
GET   /api/v1/bookings?service_id=         -- list bookings, optionally per service
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from marketplace.api.dependencies import get_store
from marketplace.api.middleware import limiter
from marketplace.api.schemas import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatusUpdateRequest,
    ErrorResponse,
)
from marketplace.config import settings
from marketplace.domain import bookings
from marketplace.domain.store import MarketplaceStore

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    status_code=201,
    response_model=BookingResponse,
    summary="Create a booking",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown service, route or vehicle"},
        409: {"model": ErrorResponse, "description": "Route or vehicle of another service"},
    },
)
@limiter.limit(settings.rate_limit)
async def create_booking(
    request: Request,
    body: BookingCreateRequest,
    store: MarketplaceStore = Depends(get_store),
):
    return await bookings.create_booking(
        store,
        service_id=body.service_id,
        route_id=body.route_id,
        vehicle_id=body.vehicle_id,
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        pickup_time=body.pickup_time,
        passenger_count=body.passenger_count,
        notes=body.notes,
    )


@router.patch(
    "/{booking_id}/status",
    response_model=BookingResponse,
    summary="Update booking status",
    description="Any status may be set from any other; no transition rules apply.",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def update_status(
    request: Request,
    booking_id: int,
    body: BookingStatusUpdateRequest,
    store: MarketplaceStore = Depends(get_store),
):
    return await bookings.update_booking_status(store, booking_id, body.status)


@router.get(
    "",
    response_model=list[BookingResponse],
    summary="List bookings",
)
@limiter.limit(settings.rate_limit)
async def list_bookings(
    request: Request,
    service_id: Optional[int] = None,
    store: MarketplaceStore = Depends(get_store),
):
    return await bookings.list_bookings(store, service_id)
