"""
Referential checks run before any write.

Booking references are checked in a fixed order and the first failure
wins: service exists, route exists, route belongs to the service, then
(only if a vehicle id was supplied) vehicle exists and belongs to the
service.
"""

from __future__ import annotations

from typing import Optional

from .entities import NotFoundError, OwnershipMismatchError, Service
from .store import MarketplaceStore


async def ensure_service_exists(
    store: MarketplaceStore, service_id: int
) -> Service:
    service = await store.get_service(service_id)
    if service is None:
        raise NotFoundError("Service", service_id)
    return service


async def validate_booking_references(
    store: MarketplaceStore,
    *,
    service_id: int,
    route_id: int,
    vehicle_id: Optional[int] = None,
) -> None:
    await ensure_service_exists(store, service_id)

    route = await store.get_route(route_id)
    if route is None:
        raise NotFoundError("Route", route_id)
    if route.service_id != service_id:
        raise OwnershipMismatchError("Route", route_id, service_id)

    if vehicle_id is None:
        return

    vehicle = await store.get_vehicle(vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle", vehicle_id)
    if vehicle.service_id != service_id:
        raise OwnershipMismatchError("Vehicle", vehicle_id, service_id)
