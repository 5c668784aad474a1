# barberconnect/schemas.py

from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime, date
from typing import List, Optional

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"  # 24h "HH:MM"


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    customer = "customer"
    barber = "barber"
    admin = "admin"


# admins are provisioned directly in the database, never through sign-up
class SignupRole(str, Enum):
    customer = "customer"
    barber = "barber"


class AppointmentStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    completed = "completed"
    cancelled = "cancelled"


class PaymentStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


class CancelledBy(str, Enum):
    customer = "customer"
    barber = "barber"
    system = "system"


class UserPublic(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    name: Optional[str] = None
    role: SignupRole = SignupRole.customer


# Barber profiles

class Coordinates(BaseModel):
    lat: float
    lng: float


class Location(BaseModel):
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    coordinates: Optional[Coordinates] = None


class Service(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    duration: int = Field(default=30, ge=15)  # minutes
    description: Optional[str] = None


class WorkingDay(BaseModel):
    open: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    close: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    is_open: bool = True


class BarberProfileCreate(BaseModel):
    shop_name: str = Field(min_length=2)
    location: Location
    services: List[Service] = Field(min_length=1)
    experience: int = Field(default=0, ge=0)
    specialties: List[str] = []
    working_hours: Optional[dict[str, WorkingDay]] = None
    images: List[str] = []
    description: Optional[str] = None


class BarberProfileUpdate(BaseModel):
    shop_name: Optional[str] = Field(default=None, min_length=2)
    location: Optional[Location] = None
    services: Optional[List[Service]] = None
    experience: Optional[int] = Field(default=None, ge=0)
    specialties: Optional[List[str]] = None
    working_hours: Optional[dict[str, WorkingDay]] = None
    images: Optional[List[str]] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class ServicesUpdate(BaseModel):
    services: List[Service]


class BarberProfilePublic(BaseModel):
    id: int
    user_id: int
    shop_name: str
    location: Location
    services: List[Service]
    rating: float
    total_reviews: int
    experience: int
    specialties: List[str]
    working_hours: dict[str, WorkingDay]
    images: List[str]
    description: Optional[str] = None
    is_active: bool


class BarberListResponse(BaseModel):
    barbers: List[BarberProfilePublic]
    total_pages: int
    current_page: int
    total: int


# Appointments

class ServiceSnapshot(BaseModel):
    name: str
    price: float
    duration: int = 30


class AppointmentCreate(BaseModel):
    barber_profile_id: int
    services: List[str] = Field(min_length=1)  # service names from the barber's catalog
    appointment_date: date
    appointment_time: str = Field(pattern=TIME_PATTERN)
    notes: Optional[str] = None


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus
    cancellation_reason: Optional[str] = None


class AppointmentCancel(BaseModel):
    cancellation_reason: Optional[str] = None


class AppointmentPublic(BaseModel):
    id: int
    customer_id: int
    barber_id: int
    barber_profile_id: int
    services: List[ServiceSnapshot]
    appointment_date: date
    appointment_time: str
    total_amount: float
    status: AppointmentStatus
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[CancelledBy] = None
    is_rated: bool
    created_at: datetime


class AppointmentListResponse(BaseModel):
    appointments: List[AppointmentPublic]
    total_pages: int
    current_page: int
    total: int


# Payments

class PaymentOrderRequest(BaseModel):
    appointment_id: int


class PaymentOrder(BaseModel):
    order_id: str
    amount: int  # minor units
    currency: str
    appointment_id: int


class PaymentVerifyRequest(BaseModel):
    appointment_id: int
    order_id: str = Field(min_length=1)
    payment_id: str = Field(min_length=1)
    signature: str = Field(min_length=1)


class PaymentConfirmation(BaseModel):
    message: str
    appointment: AppointmentPublic


class PaymentStatusResponse(BaseModel):
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    total_amount: float


# Reviews

class ReviewCreate(BaseModel):
    appointment_id: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=500)
    is_anonymous: bool = False


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=500)
    is_anonymous: Optional[bool] = None


class ReviewPublic(BaseModel):
    id: int
    customer_id: Optional[int] = None  # hidden for anonymous reviews
    barber_id: int
    appointment_id: int
    rating: int
    comment: Optional[str] = None
    is_anonymous: bool
    created_at: datetime
