"""
Store interface consumed by the domain layer.

The domain never touches a session or a global handle; every operation
receives a ``MarketplaceStore``.  ``SqlAlchemyStore`` backs it with
PostgreSQL, ``InMemoryStore`` with plain dicts (tests, demos).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Protocol

from .entities import Booking, Route, Service, Vehicle
from .enums import BookingStatus, VehicleType

if TYPE_CHECKING:
    from .search import SearchPlan


class MarketplaceStore(Protocol):
    # services
    async def get_service(self, service_id: int) -> Optional[Service]: ...

    async def list_services(self, active_only: bool = False) -> list[Service]: ...

    async def insert_service(
        self, *, name: str, phone: str, description: Optional[str]
    ) -> Service: ...

    # vehicles
    async def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]: ...

    async def list_vehicles(self, service_id: int) -> list[Vehicle]: ...

    async def insert_vehicle(
        self,
        *,
        service_id: int,
        type: VehicleType,
        capacity: int,
        description: Optional[str],
    ) -> Vehicle: ...

    # routes
    async def get_route(self, route_id: int) -> Optional[Route]: ...

    async def list_routes(self, service_id: int) -> list[Route]: ...

    async def insert_route(
        self,
        *,
        service_id: int,
        pickup_location: str,
        destination: str,
        price: Decimal,
        duration_minutes: Optional[int],
    ) -> Route: ...

    # bookings
    async def get_booking(self, booking_id: int) -> Optional[Booking]: ...

    async def list_bookings(
        self, service_id: Optional[int] = None
    ) -> list[Booking]: ...

    async def insert_booking(
        self,
        *,
        service_id: int,
        route_id: int,
        vehicle_id: Optional[int],
        customer_name: str,
        customer_phone: str,
        pickup_time: datetime,
        passenger_count: int,
        notes: Optional[str],
        status: BookingStatus,
    ) -> Booking: ...

    async def set_booking_status(
        self, booking_id: int, status: BookingStatus
    ) -> Optional[Booking]: ...

    # search
    async def find_services(self, plan: "SearchPlan") -> list[Service]:
        """Return one row per joined match; duplicates are expected."""
        ...
