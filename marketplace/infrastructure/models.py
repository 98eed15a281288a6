"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``car_services`` -- providers; soft-deactivated via ``is_active``
* ``vehicles``     -- typed, capacity-bounded units of a service
* ``routes``       -- priced pickup -> destination offerings of a service
* ``bookings``     -- customer reservations with a status

Indexes
-------
* **B-Tree** on every ``service_id`` foreign key and on the ``is_active`` /
  ``is_available`` flags used by the search joins.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)

from .database import Base
from marketplace.domain.enums import BookingStatus, VehicleType


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class ServiceModel(Base):
    __tablename__ = "car_services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("idx_car_services_active", "is_active"),)


class VehicleModel(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("car_services.id"), nullable=False)
    type = Column(
        Enum(VehicleType, name="vehicle_type", values_callable=_enum_values),
        nullable=False,
    )
    capacity = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_vehicles_service", "service_id"),
        Index("idx_vehicles_available", "is_available"),
        CheckConstraint("capacity >= 1", name="ck_vehicles_capacity"),
    )


class RouteModel(Base):
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("car_services.id"), nullable=False)
    pickup_location = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=True), nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_routes_service", "service_id"),
        Index("idx_routes_active", "is_active"),
        Index("idx_routes_locations", "pickup_location", "destination"),
    )


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("car_services.id"), nullable=False)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True)
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    pickup_time = Column(DateTime(timezone=True), nullable=False)
    passenger_count = Column(Integer, nullable=False)
    status = Column(
        Enum(BookingStatus, name="booking_status", values_callable=_enum_values),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_bookings_service", "service_id"),
        Index("idx_bookings_status", "status"),
    )
