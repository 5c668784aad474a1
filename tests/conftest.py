# tests/conftest.py

import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from barberconnect import models  # noqa: F401
from barberconnect.auth import create_access_token
from barberconnect.data import default_working_hours
from barberconnect.db import get_session
from barberconnect.main import app
from barberconnect.models import Appointment, BarberProfile, User

# fixed clock for the domain-level tests
NOW = datetime(2025, 5, 1, 12, 0)
SLOT_DATE = date(2025, 6, 1)

CATALOG = [
    {"name": "Haircut", "price": 300, "duration": 30},
    {"name": "BeardTrim", "price": 150, "duration": 20},
    {"name": "Hair Wash", "price": 100, "duration": 15},
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def override_get_session():
        return session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    def _make_user(email: str, role: str) -> dict:
        user = User(email=email, name=email.split("@")[0], password_hash="unused", role=role)
        session.add(user)
        session.commit()
        session.refresh(user)
        return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}

    return _make_user


@pytest.fixture
def customer(make_user):
    return make_user("carol@example.com", "customer")


@pytest.fixture
def other_customer(make_user):
    return make_user("dave@example.com", "customer")


@pytest.fixture
def barber(make_user):
    return make_user("bob@example.com", "barber")


@pytest.fixture
def other_barber(make_user):
    return make_user("eve@example.com", "barber")


@pytest.fixture
def admin(make_user):
    return make_user("root@example.com", "admin")


@pytest.fixture
def profile(session, barber):
    profile = BarberProfile(
        user_id=barber["id"],
        shop_name="Bob's Barbers",
        location={"address": "1 Main St", "city": "Mumbai", "state": "MH", "zip_code": "400001"},
        services=[dict(s) for s in CATALOG],
        working_hours=default_working_hours(),
    )
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


@pytest.fixture
def make_appointment(session, customer, barber, profile):
    def _make_appointment(status="pending", appointment_time="10:00", payment_status="pending", **kwargs):
        appt = Appointment(
            customer_id=kwargs.pop("customer_id", customer["id"]),
            barber_id=barber["id"],
            barber_profile_id=profile.id,
            services=[{"name": "Haircut", "price": 300, "duration": 30}],
            appointment_date=kwargs.pop("appointment_date", SLOT_DATE),
            appointment_time=appointment_time,
            total_amount=300,
            status=status,
            payment_status=payment_status,
            **kwargs,
        )
        session.add(appt)
        session.commit()
        session.refresh(appt)
        return appt

    return _make_appointment


def auth_headers(user: dict) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user['email']})}"}


def future_date(days: int = 7) -> str:
    return (date.today() + timedelta(days=days)).isoformat()
