"""
In-process ``MarketplaceStore``.

Rows live in insertion-ordered dicts with auto-increment ids.  Search
emulates the SQL inner joins (one row per matching route x vehicle
combination) so duplicates reach the domain exactly as they do from
PostgreSQL.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from marketplace.domain.entities import Booking, Route, Service, Vehicle
from marketplace.domain.enums import BookingStatus, VehicleType
from marketplace.domain.search import SearchPlan


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore:
    def __init__(self) -> None:
        self.services: dict[int, Service] = {}
        self.vehicles: dict[int, Vehicle] = {}
        self.routes: dict[int, Route] = {}
        self.bookings: dict[int, Booking] = {}
        self._ids = {
            name: itertools.count(1)
            for name in ("services", "vehicles", "routes", "bookings")
        }

    def _next_id(self, table: str) -> int:
        return next(self._ids[table])

    # services

    async def get_service(self, service_id: int) -> Optional[Service]:
        return self.services.get(service_id)

    async def list_services(self, active_only: bool = False) -> list[Service]:
        return [s for s in self.services.values() if s.is_active or not active_only]

    async def insert_service(
        self, *, name: str, phone: str, description: Optional[str]
    ) -> Service:
        service = Service(
            id=self._next_id("services"),
            name=name,
            phone=phone,
            description=description,
            created_at=_now(),
        )
        self.services[service.id] = service
        return service

    # vehicles

    async def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        return self.vehicles.get(vehicle_id)

    async def list_vehicles(self, service_id: int) -> list[Vehicle]:
        return [v for v in self.vehicles.values() if v.service_id == service_id]

    async def insert_vehicle(
        self,
        *,
        service_id: int,
        type: VehicleType,
        capacity: int,
        description: Optional[str],
    ) -> Vehicle:
        vehicle = Vehicle(
            id=self._next_id("vehicles"),
            service_id=service_id,
            type=type,
            capacity=capacity,
            description=description,
            created_at=_now(),
        )
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    # routes

    async def get_route(self, route_id: int) -> Optional[Route]:
        return self.routes.get(route_id)

    async def list_routes(self, service_id: int) -> list[Route]:
        return [r for r in self.routes.values() if r.service_id == service_id]

    async def insert_route(
        self,
        *,
        service_id: int,
        pickup_location: str,
        destination: str,
        price: Decimal,
        duration_minutes: Optional[int],
    ) -> Route:
        route = Route(
            id=self._next_id("routes"),
            service_id=service_id,
            pickup_location=pickup_location,
            destination=destination,
            price=price,
            duration_minutes=duration_minutes,
            created_at=_now(),
        )
        self.routes[route.id] = route
        return route

    # bookings

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    async def list_bookings(self, service_id: Optional[int] = None) -> list[Booking]:
        return [
            b
            for b in self.bookings.values()
            if service_id is None or b.service_id == service_id
        ]

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
    ) -> Booking:
        booking = Booking(
            id=self._next_id("bookings"),
            service_id=service_id,
            route_id=route_id,
            vehicle_id=vehicle_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            pickup_time=pickup_time,
            passenger_count=passenger_count,
            status=status,
            notes=notes,
            created_at=_now(),
        )
        self.bookings[booking.id] = booking
        return booking

    async def set_booking_status(
        self, booking_id: int, status: BookingStatus
    ) -> Optional[Booking]:
        booking = self.bookings.get(booking_id)
        if booking is None:
            return None
        self.bookings[booking_id] = replace(booking, status=status)
        return self.bookings[booking_id]

    # search

    async def find_services(self, plan: SearchPlan) -> list[Service]:
        rows: list[Service] = []
        for service in self.services.values():
            if not service.is_active:
                continue
            route_hits = (
                [
                    r
                    for r in self.routes.values()
                    if r.service_id == service.id
                    and all(p.apply(r) for p in plan.route)
                ]
                if plan.route
                else [None]
            )
            vehicle_hits = (
                [
                    v
                    for v in self.vehicles.values()
                    if v.service_id == service.id
                    and all(p.apply(v) for p in plan.vehicle)
                ]
                if plan.vehicle
                else [None]
            )
            rows.extend(service for _ in itertools.product(route_hits, vehicle_hits))
        return rows
