"""Provider catalog: services, their vehicles and their routes."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from .entities import (
    InputValidationError,
    PRICE_QUANTUM,
    Route,
    Service,
    ServiceDetails,
    Vehicle,
    to_price,
)
from .enums import VehicleType
from .store import MarketplaceStore
from .validators import ensure_service_exists

logger = logging.getLogger(__name__)


async def list_active_services(store: MarketplaceStore) -> list[Service]:
    return await store.list_services(active_only=True)


async def get_service_details(
    store: MarketplaceStore, service_id: int
) -> Optional[ServiceDetails]:
    """Service with all of its vehicles and routes, or ``None``."""
    service = await store.get_service(service_id)
    if service is None:
        return None

    vehicles = await store.list_vehicles(service_id)
    routes = await store.list_routes(service_id)
    return ServiceDetails(
        id=service.id,
        name=service.name,
        phone=service.phone,
        description=service.description,
        is_active=service.is_active,
        created_at=service.created_at,
        vehicles=vehicles,
        routes=routes,
    )


async def create_service(
    store: MarketplaceStore,
    *,
    name: str,
    phone: str,
    description: Optional[str] = None,
) -> Service:
    service = await store.insert_service(
        name=name, phone=phone, description=description or None
    )
    logger.info("Created service %d (%s)", service.id, service.name)
    return service


async def create_vehicle(
    store: MarketplaceStore,
    *,
    service_id: int,
    type: VehicleType,
    capacity: int,
    description: Optional[str] = None,
) -> Vehicle:
    if capacity < 1:
        raise InputValidationError("capacity", "must be at least 1")

    await ensure_service_exists(store, service_id)

    vehicle = await store.insert_vehicle(
        service_id=service_id,
        type=VehicleType(type),
        capacity=capacity,
        description=description or None,
    )
    logger.info(
        "Created vehicle %d (%s) for service %d",
        vehicle.id,
        vehicle.type.value,
        service_id,
    )
    return vehicle


async def create_route(
    store: MarketplaceStore,
    *,
    service_id: int,
    pickup_location: str,
    destination: str,
    price: Decimal,
    duration_minutes: Optional[int] = None,
) -> Route:
    exact = price if isinstance(price, Decimal) else Decimal(str(price))
    if exact <= 0:
        raise InputValidationError("price", "must be greater than 0")
    if exact != exact.quantize(PRICE_QUANTUM):
        raise InputValidationError("price", "at most two decimal places")
    if duration_minutes is not None and duration_minutes < 1:
        raise InputValidationError("duration_minutes", "must be greater than 0")

    await ensure_service_exists(store, service_id)

    route = await store.insert_route(
        service_id=service_id,
        pickup_location=pickup_location,
        destination=destination,
        price=to_price(exact),
        duration_minutes=duration_minutes,
    )
    logger.info(
        "Created route %d (%s -> %s) for service %d",
        route.id,
        route.pickup_location,
        route.destination,
        service_id,
    )
    return route
