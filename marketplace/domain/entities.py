"""
Domain entities and errors.

Entities are plain dataclasses so both store implementations (SQLAlchemy
and in-memory) hand the same shapes back to the domain layer.

Error kinds
-----------
- ``NotFoundError``: a referenced service / route / vehicle / booking is missing.
- ``OwnershipMismatchError``: a route or vehicle belongs to another service.
- ``InputValidationError``: a field violates its constraint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .enums import BookingStatus, VehicleType

PRICE_QUANTUM = Decimal("0.01")


class MarketplaceError(Exception):
    """Base class for all domain failures."""


class NotFoundError(MarketplaceError):
    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class OwnershipMismatchError(MarketplaceError):
    def __init__(self, entity: str, entity_id: int, service_id: int):
        self.entity = entity
        self.entity_id = entity_id
        self.service_id = service_id
        super().__init__(
            f"{entity} {entity_id} does not belong to service {service_id}"
        )


class InputValidationError(MarketplaceError):
    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}")


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class Service:
    id: int
    name: str
    phone: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass
class Vehicle:
    id: int
    service_id: int
    type: VehicleType
    capacity: int
    description: Optional[str] = None
    is_available: bool = True
    created_at: Optional[datetime] = None


@dataclass
class Route:
    id: int
    service_id: int
    pickup_location: str
    destination: str
    price: Decimal
    duration_minutes: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.price = to_price(self.price)


@dataclass
class Booking:
    id: int
    service_id: int
    route_id: int
    customer_name: str
    customer_phone: str
    pickup_time: datetime
    passenger_count: int
    vehicle_id: Optional[int] = None
    status: BookingStatus = BookingStatus.PENDING
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class ServiceDetails(Service):
    vehicles: list[Vehicle] = field(default_factory=list)
    routes: list[Route] = field(default_factory=list)


def to_price(value) -> Decimal:
    """Coerce *value* to a two-decimal ``Decimal`` without float drift."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(PRICE_QUANTUM)
