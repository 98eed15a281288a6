"""
Service search filter
=====================

A search is an optional, partially populated ``SearchCriteria``.  It is
compiled into a ``SearchPlan``: two predicate lists, one per joined table.

* Route predicates exist only if ``pickup_location`` or ``destination`` is
  given; they always include ``is_active == True``.
* Vehicle predicates exist only if ``vehicle_type`` or ``passenger_count``
  is given; they always include ``is_available == True``.
* Everything is ANDed.  A service qualifies when at least one route row
  and at least one vehicle row match (not necessarily related rows).
* ``pickup_time`` is carried but never matched on.

Predicates use binary operators from :mod:`operator`, so the same object
evaluates a plain attribute (``InMemoryStore``) or builds a SQL clause
from a mapped column (``SqlAlchemyStore``).
"""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from .entities import Service
from .enums import VehicleType
from .store import MarketplaceStore


class Target(str, enum.Enum):
    ROUTE = "route"
    VEHICLE = "vehicle"


@dataclass(frozen=True)
class Predicate:
    target: Target
    field: str
    compare: Callable[[Any, Any], Any]
    value: Any

    def apply(self, subject: Any) -> Any:
        """Evaluate against a row object or a mapped class."""
        return self.compare(getattr(subject, self.field), self.value)


@dataclass
class SearchCriteria:
    pickup_location: Optional[str] = None
    destination: Optional[str] = None
    vehicle_type: Optional[VehicleType] = None
    pickup_time: Optional[datetime] = None  # reserved, not matched on
    passenger_count: Optional[int] = None


@dataclass
class SearchPlan:
    route: list[Predicate] = field(default_factory=list)
    vehicle: list[Predicate] = field(default_factory=list)

    @property
    def is_unfiltered(self) -> bool:
        return not self.route and not self.vehicle


def _given(value: Any) -> bool:
    return value is not None and value != ""


def build_search_plan(criteria: SearchCriteria) -> SearchPlan:
    plan = SearchPlan()

    route_fields = {
        "pickup_location": criteria.pickup_location,
        "destination": criteria.destination,
    }
    given_route = {k: v for k, v in route_fields.items() if _given(v)}
    if given_route:
        plan.route.append(
            Predicate(Target.ROUTE, "is_active", operator.eq, True)
        )
        for name, value in given_route.items():
            plan.route.append(Predicate(Target.ROUTE, name, operator.eq, value))

    if _given(criteria.vehicle_type) or _given(criteria.passenger_count):
        plan.vehicle.append(
            Predicate(Target.VEHICLE, "is_available", operator.eq, True)
        )
        if _given(criteria.vehicle_type):
            plan.vehicle.append(
                Predicate(
                    Target.VEHICLE,
                    "type",
                    operator.eq,
                    VehicleType(criteria.vehicle_type),
                )
            )
        if _given(criteria.passenger_count):
            plan.vehicle.append(
                Predicate(
                    Target.VEHICLE, "capacity", operator.ge, criteria.passenger_count
                )
            )

    return plan


def unique_services(rows: Iterable[Service]) -> list[Service]:
    """Drop repeated services (by id), keeping first-seen order."""
    seen: dict[int, Service] = {}
    for row in rows:
        if row.id not in seen:
            seen[row.id] = row
    return list(seen.values())


async def search_services(
    store: MarketplaceStore, criteria: SearchCriteria
) -> list[Service]:
    plan = build_search_plan(criteria)
    rows = await store.find_services(plan)
    return unique_services(rows)
