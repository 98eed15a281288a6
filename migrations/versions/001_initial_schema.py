"""Initial schema: car services, vehicles, routes and bookings.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None

VEHICLE_TYPES = ("4-seater", "7-seater", "16-seater", "other")
BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


def upgrade() -> None:
    # ── car_services ──────────────────────────────────────────────────
    op.create_table(
        "car_services",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "is_active", sa.Boolean, nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_car_services_active", "car_services", ["is_active"])

    # ── vehicles ──────────────────────────────────────────────────────
    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "service_id",
            sa.Integer,
            sa.ForeignKey("car_services.id"),
            nullable=False,
        ),
        sa.Column(
            "type", sa.Enum(*VEHICLE_TYPES, name="vehicle_type"), nullable=False
        ),
        sa.Column("capacity", sa.Integer, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "is_available", sa.Boolean, nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("capacity >= 1", name="ck_vehicles_capacity"),
    )
    op.create_index("idx_vehicles_service", "vehicles", ["service_id"])
    op.create_index("idx_vehicles_available", "vehicles", ["is_available"])

    # ── routes ────────────────────────────────────────────────────────
    op.create_table(
        "routes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "service_id",
            sa.Integer,
            sa.ForeignKey("car_services.id"),
            nullable=False,
        ),
        sa.Column("pickup_location", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("duration_minutes", sa.Integer, nullable=True),
        sa.Column(
            "is_active", sa.Boolean, nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_routes_service", "routes", ["service_id"])
    op.create_index("idx_routes_active", "routes", ["is_active"])
    op.create_index(
        "idx_routes_locations", "routes", ["pickup_location", "destination"]
    )

    # ── bookings ──────────────────────────────────────────────────────
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "service_id",
            sa.Integer,
            sa.ForeignKey("car_services.id"),
            nullable=False,
        ),
        sa.Column(
            "route_id", sa.Integer, sa.ForeignKey("routes.id"), nullable=False
        ),
        sa.Column(
            "vehicle_id", sa.Integer, sa.ForeignKey("vehicles.id"), nullable=True
        ),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(50), nullable=False),
        sa.Column("pickup_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("passenger_count", sa.Integer, nullable=False),
        sa.Column(
            "status",
            sa.Enum(*BOOKING_STATUSES, name="booking_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_bookings_service", "bookings", ["service_id"])
    op.create_index("idx_bookings_status", "bookings", ["status"])


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("routes")
    op.drop_table("vehicles")
    op.drop_table("car_services")
    op.execute("DROP TYPE IF EXISTS booking_status")
    op.execute("DROP TYPE IF EXISTS vehicle_type")
