"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from marketplace.domain.enums import BookingStatus, VehicleType


# ── Requests ──────────────────────────────────────────────────────────


class ServiceCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None


class VehicleCreateRequest(BaseModel):
    service_id: int
    type: VehicleType
    capacity: int = Field(..., gt=0)
    description: Optional[str] = None


class RouteCreateRequest(BaseModel):
    service_id: int
    pickup_location: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    duration_minutes: Optional[int] = Field(None, gt=0)


class BookingCreateRequest(BaseModel):
    service_id: int
    route_id: int
    vehicle_id: Optional[int] = None
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: str = Field(..., min_length=1, max_length=50)
    pickup_time: datetime
    passenger_count: int = Field(..., gt=0)
    notes: Optional[str] = None


class BookingStatusUpdateRequest(BaseModel):
    status: BookingStatus


# ── Responses ─────────────────────────────────────────────────────────


class ServiceResponse(BaseModel):
    id: int
    name: str
    phone: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class VehicleResponse(BaseModel):
    id: int
    service_id: int
    type: VehicleType
    capacity: int
    description: Optional[str] = None
    is_available: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RouteResponse(BaseModel):
    id: int
    service_id: int
    pickup_location: str
    destination: str
    price: Decimal = Field(..., decimal_places=2)
    duration_minutes: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ServiceDetailsResponse(ServiceResponse):
    vehicles: list[VehicleResponse] = []
    routes: list[RouteResponse] = []


class BookingResponse(BaseModel):
    id: int
    service_id: int
    route_id: int
    vehicle_id: Optional[int] = None
    customer_name: str
    customer_phone: str
    pickup_time: datetime
    passenger_count: int
    status: BookingStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime


class ErrorResponse(BaseModel):
    detail: str
