"""Domain enumerations."""

import enum


class VehicleType(str, enum.Enum):
    FOUR_SEATER = "4-seater"
    SEVEN_SEATER = "7-seater"
    SIXTEEN_SEATER = "16-seater"
    OTHER = "other"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
