# barberconnect/models.py

from typing import Optional, List
from datetime import datetime, timezone, date as Date

from sqlalchemy import Index, UniqueConstraint, text
from sqlalchemy.types import JSON
from sqlmodel import SQLModel, Field, Column

ACTIVE_SLOT_CLAUSE = "status IN ('pending', 'approved')"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    name: Optional[str] = None
    role: str  # customer, barber or admin


class BarberProfile(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True, unique=True)
    shop_name: str
    location: dict = Field(sa_column=Column(JSON))
    services: List[dict] = Field(default_factory=list, sa_column=Column(JSON))  # name, price, duration, description
    rating: float = 0.0
    total_reviews: int = 0
    experience: int = 0  # years
    specialties: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    working_hours: dict = Field(default_factory=dict, sa_column=Column(JSON))  # weekday -> open, close, is_open
    images: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    description: Optional[str] = None
    is_active: bool = True

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Appointment(SQLModel, table=True):
    __table_args__ = (
        # one active (pending/approved) appointment per barber slot
        Index(
            "uq_active_barber_slot",
            "barber_id",
            "appointment_date",
            "appointment_time",
            unique=True,
            sqlite_where=text(ACTIVE_SLOT_CLAUSE),
            postgresql_where=text(ACTIVE_SLOT_CLAUSE),
        ),
        Index("ix_appointment_customer_date", "customer_id", "appointment_date"),
        Index("ix_appointment_barber_date", "barber_id", "appointment_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    customer_id: int = Field(foreign_key="user.id")
    barber_id: int = Field(foreign_key="user.id")
    barber_profile_id: int = Field(foreign_key="barberprofile.id")
    services: List[dict] = Field(sa_column=Column(JSON))  # snapshots copied at booking time
    appointment_date: Date
    appointment_time: str  # "HH:MM"
    total_amount: float
    status: str = "pending"
    payment_status: str = "pending"
    payment_id: Optional[str] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None  # customer, barber or system
    is_rated: bool = False

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Review(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("appointment_id", name="uq_review_appointment"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    customer_id: int = Field(foreign_key="user.id")
    barber_id: int = Field(foreign_key="user.id", index=True)
    appointment_id: int = Field(foreign_key="appointment.id")
    rating: int  # 1..5
    comment: Optional[str] = None
    is_anonymous: bool = False

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
