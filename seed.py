"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 4 sample car services (one inactive)
  - vehicles of every type spread across the services
  - airport / beach / city routes
  - 1 pending booking
"""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import text

from marketplace.domain import bookings, catalog
from marketplace.domain.enums import VehicleType
from marketplace.infrastructure.database import async_session_factory, engine
from marketplace.infrastructure.repositories import SqlAlchemyStore


SERVICES = [
    {
        "name": "Airport Express Cabs",
        "phone": "+84 90 111 2233",
        "description": "Round-the-clock airport transfers",
        "vehicles": [
            (VehicleType.FOUR_SEATER, 4),
            (VehicleType.SEVEN_SEATER, 7),
        ],
        "routes": [
            ("Airport", "Beach", Decimal("25.50"), 40),
            ("Airport", "City Center", Decimal("18.00"), 30),
        ],
    },
    {
        "name": "Coastal Shuttle",
        "phone": "+84 90 444 5566",
        "description": "Group shuttles along the coast",
        "vehicles": [
            (VehicleType.SIXTEEN_SEATER, 16),
        ],
        "routes": [
            ("City Center", "Beach", Decimal("12.00"), 25),
            ("Airport", "Beach", Decimal("30.00"), 45),
        ],
    },
    {
        "name": "Old Town Taxi",
        "phone": "+84 90 777 8899",
        "description": None,
        "vehicles": [
            (VehicleType.FOUR_SEATER, 4),
            (VehicleType.OTHER, 2),
        ],
        "routes": [
            ("Old Town", "Airport", Decimal("20.00"), None),
        ],
    },
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM car_services"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        store = SqlAlchemyStore(session)

        # ── Services, vehicles, routes ────────────────────────────────
        first_service = first_route = None
        for s in SERVICES:
            service = await catalog.create_service(
                store, name=s["name"], phone=s["phone"], description=s["description"]
            )
            for vehicle_type, capacity in s["vehicles"]:
                await catalog.create_vehicle(
                    store, service_id=service.id, type=vehicle_type, capacity=capacity
                )
            for pickup, destination, price, minutes in s["routes"]:
                route = await catalog.create_route(
                    store,
                    service_id=service.id,
                    pickup_location=pickup,
                    destination=destination,
                    price=price,
                    duration_minutes=minutes,
                )
                if first_route is None:
                    first_service, first_route = service, route
        print(f"  Created {len(SERVICES)} active services")

        # ── Inactive service (hidden from listings and search) ────────
        retired = await catalog.create_service(
            store, name="Retired Limo Co.", phone="+84 90 000 0000"
        )
        service_row = await store.services.get_by_id(retired.id)
        service_row.is_active = False
        await session.flush()
        print("  Created 1 inactive service")

        # ── Booking ───────────────────────────────────────────────────
        await bookings.create_booking(
            store,
            service_id=first_service.id,
            route_id=first_route.id,
            customer_name="Linh Tran",
            customer_phone="+84 91 234 5678",
            pickup_time=datetime.now(timezone.utc) + timedelta(days=1),
            passenger_count=3,
            notes="Two suitcases",
        )
        print("  Created 1 booking")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
