"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
entity-relevant queries only.  ``SqlAlchemyStore`` composes them into the
``MarketplaceStore`` the domain layer is written against, converting ORM
rows into domain entities on the way out.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import BookingModel, RouteModel, ServiceModel, VehicleModel
from marketplace.domain.entities import Booking, Route, Service, Vehicle
from marketplace.domain.enums import BookingStatus, VehicleType
from marketplace.domain.search import SearchPlan


class ServiceRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, service: ServiceModel) -> ServiceModel:
        self.session.add(service)
        await self.session.flush()
        await self.session.refresh(service)
        return service

    async def get_by_id(self, service_id: int) -> Optional[ServiceModel]:
        return await self.session.get(ServiceModel, service_id)

    async def list_all(self, active_only: bool = False) -> list[ServiceModel]:
        query = select(ServiceModel).order_by(ServiceModel.id)
        if active_only:
            query = query.where(ServiceModel.is_active.is_(True))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def search(self, plan: SearchPlan) -> list[ServiceModel]:
        """Active services inner-joined to matching routes / vehicles.

        One row per joined combination; callers dedupe.
        """
        query = select(ServiceModel).where(ServiceModel.is_active.is_(True))
        if plan.route:
            query = query.join(
                RouteModel, RouteModel.service_id == ServiceModel.id
            ).where(*(p.apply(RouteModel) for p in plan.route))
        if plan.vehicle:
            query = query.join(
                VehicleModel, VehicleModel.service_id == ServiceModel.id
            ).where(*(p.apply(VehicleModel) for p in plan.vehicle))
        result = await self.session.execute(query.order_by(ServiceModel.id))
        return list(result.scalars().all())


class VehicleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, vehicle: VehicleModel) -> VehicleModel:
        self.session.add(vehicle)
        await self.session.flush()
        await self.session.refresh(vehicle)
        return vehicle

    async def get_by_id(self, vehicle_id: int) -> Optional[VehicleModel]:
        return await self.session.get(VehicleModel, vehicle_id)

    async def list_for_service(self, service_id: int) -> list[VehicleModel]:
        result = await self.session.execute(
            select(VehicleModel)
            .where(VehicleModel.service_id == service_id)
            .order_by(VehicleModel.id)
        )
        return list(result.scalars().all())


class RouteRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, route: RouteModel) -> RouteModel:
        self.session.add(route)
        await self.session.flush()
        await self.session.refresh(route)
        return route

    async def get_by_id(self, route_id: int) -> Optional[RouteModel]:
        return await self.session.get(RouteModel, route_id)

    async def list_for_service(self, service_id: int) -> list[RouteModel]:
        result = await self.session.execute(
            select(RouteModel)
            .where(RouteModel.service_id == service_id)
            .order_by(RouteModel.id)
        )
        return list(result.scalars().all())


class BookingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, booking: BookingModel) -> BookingModel:
        self.session.add(booking)
        await self.session.flush()
        await self.session.refresh(booking)
        return booking

    async def get_by_id(self, booking_id: int) -> Optional[BookingModel]:
        return await self.session.get(BookingModel, booking_id)

    async def list_all(self, service_id: Optional[int] = None) -> list[BookingModel]:
        query = select(BookingModel).order_by(BookingModel.id)
        if service_id is not None:
            query = query.where(BookingModel.service_id == service_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())


# ── ORM -> domain ─────────────────────────────────────────────────────


def _service(m: ServiceModel) -> Service:
    return Service(
        id=m.id,
        name=m.name,
        phone=m.phone,
        description=m.description,
        is_active=m.is_active,
        created_at=m.created_at,
    )


def _vehicle(m: VehicleModel) -> Vehicle:
    return Vehicle(
        id=m.id,
        service_id=m.service_id,
        type=VehicleType(m.type),
        capacity=m.capacity,
        description=m.description,
        is_available=m.is_available,
        created_at=m.created_at,
    )


def _route(m: RouteModel) -> Route:
    return Route(
        id=m.id,
        service_id=m.service_id,
        pickup_location=m.pickup_location,
        destination=m.destination,
        price=m.price,
        duration_minutes=m.duration_minutes,
        is_active=m.is_active,
        created_at=m.created_at,
    )


def _booking(m: BookingModel) -> Booking:
    return Booking(
        id=m.id,
        service_id=m.service_id,
        route_id=m.route_id,
        vehicle_id=m.vehicle_id,
        customer_name=m.customer_name,
        customer_phone=m.customer_phone,
        pickup_time=m.pickup_time,
        passenger_count=m.passenger_count,
        status=BookingStatus(m.status),
        notes=m.notes,
        created_at=m.created_at,
    )


class SqlAlchemyStore:
    """``MarketplaceStore`` backed by one ``AsyncSession``.

    Only flushes; committing is the caller's unit-of-work decision.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.services = ServiceRepository(session)
        self.vehicles = VehicleRepository(session)
        self.routes = RouteRepository(session)
        self.bookings = BookingRepository(session)

    # services

    async def get_service(self, service_id: int) -> Optional[Service]:
        m = await self.services.get_by_id(service_id)
        return _service(m) if m else None

    async def list_services(self, active_only: bool = False) -> list[Service]:
        return [_service(m) for m in await self.services.list_all(active_only)]

    async def insert_service(
        self, *, name: str, phone: str, description: Optional[str]
    ) -> Service:
        m = await self.services.create(
            ServiceModel(name=name, phone=phone, description=description)
        )
        return _service(m)

    # vehicles

    async def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        m = await self.vehicles.get_by_id(vehicle_id)
        return _vehicle(m) if m else None

    async def list_vehicles(self, service_id: int) -> list[Vehicle]:
        return [_vehicle(m) for m in await self.vehicles.list_for_service(service_id)]

    async def insert_vehicle(
        self,
        *,
        service_id: int,
        type: VehicleType,
        capacity: int,
        description: Optional[str],
    ) -> Vehicle:
        m = await self.vehicles.create(
            VehicleModel(
                service_id=service_id,
                type=type,
                capacity=capacity,
                description=description,
            )
        )
        return _vehicle(m)

    # routes

    async def get_route(self, route_id: int) -> Optional[Route]:
        m = await self.routes.get_by_id(route_id)
        return _route(m) if m else None

    async def list_routes(self, service_id: int) -> list[Route]:
        return [_route(m) for m in await self.routes.list_for_service(service_id)]

    async def insert_route(
        self,
        *,
        service_id: int,
        pickup_location: str,
        destination: str,
        price: Decimal,
        duration_minutes: Optional[int],
    ) -> Route:
        m = await self.routes.create(
            RouteModel(
                service_id=service_id,
                pickup_location=pickup_location,
                destination=destination,
                price=price,
                duration_minutes=duration_minutes,
            )
        )
        return _route(m)

    # bookings

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        m = await self.bookings.get_by_id(booking_id)
        return _booking(m) if m else None

    async def list_bookings(self, service_id: Optional[int] = None) -> list[Booking]:
        return [_booking(m) for m in await self.bookings.list_all(service_id)]

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
        m = await self.bookings.create(
            BookingModel(
                service_id=service_id,
                route_id=route_id,
                vehicle_id=vehicle_id,
                customer_name=customer_name,
                customer_phone=customer_phone,
                pickup_time=pickup_time,
                passenger_count=passenger_count,
                notes=notes,
                status=status,
            )
        )
        return _booking(m)

    async def set_booking_status(
        self, booking_id: int, status: BookingStatus
    ) -> Optional[Booking]:
        m = await self.bookings.get_by_id(booking_id)
        if m is None:
            return None
        m.status = status
        await self.session.flush()
        return _booking(m)

    # search

    async def find_services(self, plan: SearchPlan) -> list[Service]:
        return [_service(m) for m in await self.services.search(plan)]
