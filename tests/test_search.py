"""Service search: predicate building and join / dedupe semantics."""

import operator
from datetime import datetime
from decimal import Decimal

import pytest

from marketplace.domain import catalog
from marketplace.domain.entities import Service
from marketplace.domain.enums import VehicleType
from marketplace.domain.search import (
    SearchCriteria,
    Target,
    build_search_plan,
    search_services,
    unique_services,
)


async def _service(store, name):
    return await catalog.create_service(store, name=name, phone="123-456-7890")


async def _route(store, service_id, pickup="Airport", destination="City Center"):
    return await catalog.create_route(
        store,
        service_id=service_id,
        pickup_location=pickup,
        destination=destination,
        price=Decimal("25.00"),
    )


async def _vehicle(store, service_id, vehicle_type=VehicleType.FOUR_SEATER, capacity=4):
    return await catalog.create_vehicle(
        store, service_id=service_id, type=vehicle_type, capacity=capacity
    )


def _names(services):
    return [s.name for s in services]


class TestBuildSearchPlan:
    def test_empty_criteria_is_unfiltered(self):
        plan = build_search_plan(SearchCriteria())
        assert plan.is_unfiltered

    def test_route_fields_add_active_route_predicate(self):
        plan = build_search_plan(SearchCriteria(pickup_location="Airport"))
        assert [(p.field, p.value) for p in plan.route] == [
            ("is_active", True),
            ("pickup_location", "Airport"),
        ]
        assert plan.vehicle == []

    def test_vehicle_fields_add_available_vehicle_predicate(self):
        plan = build_search_plan(
            SearchCriteria(vehicle_type=VehicleType.SEVEN_SEATER, passenger_count=5)
        )
        assert plan.route == []
        fields = [(p.field, p.compare, p.value) for p in plan.vehicle]
        assert fields == [
            ("is_available", operator.eq, True),
            ("type", operator.eq, VehicleType.SEVEN_SEATER),
            ("capacity", operator.ge, 5),
        ]
        assert all(p.target is Target.VEHICLE for p in plan.vehicle)

    def test_pickup_time_never_becomes_a_predicate(self):
        plan = build_search_plan(SearchCriteria(pickup_time=datetime(2026, 1, 1, 9)))
        assert plan.is_unfiltered

    def test_empty_strings_count_as_absent(self):
        plan = build_search_plan(SearchCriteria(pickup_location="", destination=""))
        assert plan.is_unfiltered

    def test_raw_vehicle_type_string_is_coerced(self):
        plan = build_search_plan(SearchCriteria(vehicle_type="16-seater"))
        assert plan.vehicle[-1].value is VehicleType.SIXTEEN_SEATER


class TestUniqueServices:
    def test_keeps_first_seen_order(self):
        a, b, c = (Service(id=i, name=n, phone="1") for i, n in ((3, "a"), (1, "b"), (2, "c")))
        assert _names(unique_services([a, b, a, c, b, a])) == ["a", "b", "c"]


class TestSearchServices:
    @pytest.mark.asyncio
    async def test_no_filters_returns_all_active_services(self, store, switch_off):
        await _service(store, "Service 1")
        await _service(store, "Service 2")
        inactive = await _service(store, "Inactive Service")
        await switch_off("services", inactive.id, "is_active")
        # vehicle / route data must not matter without filters
        await _route(store, inactive.id)

        result = await search_services(store, SearchCriteria())

        assert sorted(_names(result)) == ["Service 1", "Service 2"]
        assert result == await catalog.list_active_services(store)

    @pytest.mark.asyncio
    async def test_filter_by_pickup_location(self, store):
        s1 = await _service(store, "Service 1")
        s2 = await _service(store, "Service 2")
        await _route(store, s1.id, "Airport", "City Center")
        await _route(store, s2.id, "Hotel", "City Center")

        result = await search_services(store, SearchCriteria(pickup_location="Airport"))

        assert _names(result) == ["Service 1"]

    @pytest.mark.asyncio
    async def test_filter_by_destination(self, store):
        s1 = await _service(store, "Service 1")
        s2 = await _service(store, "Service 2")
        await _route(store, s1.id, "Airport", "Beach")
        await _route(store, s2.id, "Airport", "City Center")

        result = await search_services(store, SearchCriteria(destination="Beach"))

        assert _names(result) == ["Service 1"]

    @pytest.mark.asyncio
    async def test_filter_by_vehicle_type(self, store):
        s1 = await _service(store, "Service 1")
        s2 = await _service(store, "Service 2")
        await _vehicle(store, s1.id, VehicleType.SEVEN_SEATER, 7)
        await _vehicle(store, s2.id, VehicleType.FOUR_SEATER, 4)

        result = await search_services(
            store, SearchCriteria(vehicle_type=VehicleType.SEVEN_SEATER)
        )

        assert _names(result) == ["Service 1"]

    @pytest.mark.asyncio
    async def test_passenger_count_requires_enough_capacity(self, store):
        s1 = await _service(store, "Service 1")
        s2 = await _service(store, "Service 2")
        await _vehicle(store, s1.id, VehicleType.SEVEN_SEATER, 7)
        await _vehicle(store, s2.id, VehicleType.FOUR_SEATER, 4)

        assert _names(
            await search_services(store, SearchCriteria(passenger_count=6))
        ) == ["Service 1"]
        assert sorted(
            _names(await search_services(store, SearchCriteria(passenger_count=4)))
        ) == ["Service 1", "Service 2"]

    @pytest.mark.asyncio
    async def test_combined_filters_return_single_deduplicated_service(self, store):
        s1 = await _service(store, "Service 1")
        s2 = await _service(store, "Service 2")
        s3 = await _service(store, "Service 3")

        # Service 1: two matching routes and two matching vehicles
        await _route(store, s1.id, "Airport", "Beach")
        await _route(store, s1.id, "Airport", "Beach")
        await _vehicle(store, s1.id, VehicleType.SEVEN_SEATER, 7)
        await _vehicle(store, s1.id, VehicleType.SEVEN_SEATER, 7)
        # Service 2: right route, wrong vehicle
        await _route(store, s2.id, "Airport", "Beach")
        await _vehicle(store, s2.id, VehicleType.FOUR_SEATER, 4)
        # Service 3: right vehicle, wrong route
        await _route(store, s3.id, "Airport", "City Center")
        await _vehicle(store, s3.id, VehicleType.SEVEN_SEATER, 7)

        result = await search_services(
            store,
            SearchCriteria(
                pickup_location="Airport",
                destination="Beach",
                vehicle_type=VehicleType.SEVEN_SEATER,
            ),
        )

        assert [s.id for s in result] == [s1.id]

    @pytest.mark.asyncio
    async def test_route_and_vehicle_rows_need_not_be_related(self, store):
        s1 = await _service(store, "Service 1")
        await _route(store, s1.id, "Airport", "Beach")
        await _route(store, s1.id, "Hotel", "Museum")
        await _vehicle(store, s1.id, VehicleType.FOUR_SEATER, 4)
        await _vehicle(store, s1.id, VehicleType.SIXTEEN_SEATER, 16)

        result = await search_services(
            store,
            SearchCriteria(pickup_location="Airport", passenger_count=10),
        )

        assert _names(result) == ["Service 1"]

    @pytest.mark.asyncio
    async def test_inactive_routes_are_ignored(self, store, switch_off):
        s1 = await _service(store, "Service 1")
        route = await _route(store, s1.id, "Airport", "Beach")
        await switch_off("routes", route.id, "is_active")

        result = await search_services(store, SearchCriteria(pickup_location="Airport"))

        assert result == []

    @pytest.mark.asyncio
    async def test_unavailable_vehicles_are_ignored(self, store, switch_off):
        s1 = await _service(store, "Service 1")
        vehicle = await _vehicle(store, s1.id, VehicleType.SEVEN_SEATER, 7)
        await switch_off("vehicles", vehicle.id, "is_available")

        result = await search_services(
            store, SearchCriteria(vehicle_type=VehicleType.SEVEN_SEATER)
        )

        assert result == []

    @pytest.mark.asyncio
    async def test_inactive_service_with_matching_rows_is_excluded(self, store, switch_off):
        s1 = await _service(store, "Service 1")
        await _route(store, s1.id, "Airport", "Beach")
        await _vehicle(store, s1.id, VehicleType.SEVEN_SEATER, 7)
        await switch_off("services", s1.id, "is_active")

        result = await search_services(
            store,
            SearchCriteria(pickup_location="Airport", vehicle_type=VehicleType.SEVEN_SEATER),
        )

        assert result == []

    @pytest.mark.asyncio
    async def test_pickup_time_does_not_narrow_results(self, store):
        s1 = await _service(store, "Service 1")
        await _route(store, s1.id, "Airport", "Beach")

        with_time = await search_services(
            store,
            SearchCriteria(pickup_location="Airport", pickup_time=datetime(2030, 1, 1, 6)),
        )
        without_time = await search_services(
            store, SearchCriteria(pickup_location="Airport")
        )

        assert with_time == without_time == [s1]

    @pytest.mark.asyncio
    async def test_no_match_returns_empty_list(self, store):
        s1 = await _service(store, "Service 1")
        await _route(store, s1.id, "Airport", "Beach")

        result = await search_services(store, SearchCriteria(pickup_location="Moon"))

        assert result == []
