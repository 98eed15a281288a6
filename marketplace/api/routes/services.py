"""
Service catalog endpoints
=========================

GET  /api/v1/services              -- list active services
GET  /api/v1/services/search       -- filter by route / vehicle criteria
GET  /api/v1/services/{service_id} -- service with its vehicles and routes
POST /api/v1/services              -- register a service
POST /api/v1/vehicles              -- add a vehicle to a service
POST /api/v1/routes                -- add a priced route to a service
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from marketplace.api.dependencies import get_store
from marketplace.api.middleware import limiter
from marketplace.api.schemas import (
    ErrorResponse,
    RouteCreateRequest,
    RouteResponse,
    ServiceCreateRequest,
    ServiceDetailsResponse,
    ServiceResponse,
    VehicleCreateRequest,
    VehicleResponse,
)
from marketplace.config import settings
from marketplace.domain import catalog
from marketplace.domain.enums import VehicleType
from marketplace.domain.search import SearchCriteria, search_services
from marketplace.domain.store import MarketplaceStore

router = APIRouter(tags=["services"])


@router.get(
    "/services",
    response_model=list[ServiceResponse],
    summary="List active services",
)
@limiter.limit(settings.rate_limit)
async def list_services(
    request: Request,
    store: MarketplaceStore = Depends(get_store),
):
    return await catalog.list_active_services(store)


@router.get(
    "/services/search",
    response_model=list[ServiceResponse],
    summary="Search active services",
    description=(
        "All supplied criteria are ANDed. Route criteria require an active "
        "matching route, vehicle criteria an available matching vehicle. "
        "``pickup_time`` is accepted but does not narrow the results."
    ),
)
@limiter.limit(settings.rate_limit)
async def search(
    request: Request,
    pickup_location: Optional[str] = None,
    destination: Optional[str] = None,
    vehicle_type: Optional[VehicleType] = None,
    pickup_time: Optional[datetime] = None,
    passenger_count: Optional[int] = Query(None, gt=0),
    store: MarketplaceStore = Depends(get_store),
):
    criteria = SearchCriteria(
        pickup_location=pickup_location,
        destination=destination,
        vehicle_type=vehicle_type,
        pickup_time=pickup_time,
        passenger_count=passenger_count,
    )
    return await search_services(store, criteria)


@router.get(
    "/services/{service_id}",
    response_model=ServiceDetailsResponse,
    summary="Service details with vehicles and routes",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_service(
    request: Request,
    service_id: int,
    store: MarketplaceStore = Depends(get_store),
):
    details = await catalog.get_service_details(store, service_id)
    if details is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return details


@router.post(
    "/services",
    status_code=201,
    response_model=ServiceResponse,
    summary="Register a car service",
)
@limiter.limit(settings.rate_limit)
async def create_service(
    request: Request,
    body: ServiceCreateRequest,
    store: MarketplaceStore = Depends(get_store),
):
    return await catalog.create_service(
        store, name=body.name, phone=body.phone, description=body.description
    )


@router.post(
    "/vehicles",
    status_code=201,
    response_model=VehicleResponse,
    summary="Add a vehicle to a service",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def create_vehicle(
    request: Request,
    body: VehicleCreateRequest,
    store: MarketplaceStore = Depends(get_store),
):
    return await catalog.create_vehicle(
        store,
        service_id=body.service_id,
        type=body.type,
        capacity=body.capacity,
        description=body.description,
    )


@router.post(
    "/routes",
    status_code=201,
    response_model=RouteResponse,
    summary="Add a priced route to a service",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def create_route(
    request: Request,
    body: RouteCreateRequest,
    store: MarketplaceStore = Depends(get_store),
):
    return await catalog.create_route(
        store,
        service_id=body.service_id,
        pickup_location=body.pickup_location,
        destination=body.destination,
        price=body.price,
        duration_minutes=body.duration_minutes,
    )
