# barberconnect/data.py

import logging

from sqlmodel import Session, select

from .models import BarberProfile, User

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

shop_settings = {
    "open_time": "09:00",
    "close_time": "18:00",
    "closed_days": ("sunday",),
}


def default_working_hours() -> dict:
    return {
        day: {
            "open": shop_settings["open_time"],
            "close": shop_settings["close_time"],
            "is_open": day not in shop_settings["closed_days"],
        }
        for day in WEEKDAYS
    }


SAMPLE_BARBERS = [
    {
        "email": "sujey@barberconnect.test",
        "name": "Sujey",
        "shop_name": "Sujey's Barber Shop",
        "location": {"address": "123 Main Street", "city": "Mumbai", "state": "Maharashtra", "zip_code": "400001"},
        "services": [
            {"name": "Haircut", "price": 300, "duration": 30},
            {"name": "Beard Trim", "price": 150, "duration": 20},
            {"name": "Hair Wash", "price": 100, "duration": 15},
        ],
        "experience": 5,
        "specialties": ["Modern Cuts", "Beard Styling"],
        "description": "Professional barber shop with modern techniques",
    },
    {
        "email": "elite@barberconnect.test",
        "name": "Elite Cuts",
        "shop_name": "Elite Cuts Studio",
        "location": {"address": "456 Park Avenue", "city": "Mumbai", "state": "Maharashtra", "zip_code": "400002"},
        "services": [
            {"name": "Premium Haircut", "price": 500, "duration": 45},
            {"name": "Beard Styling", "price": 200, "duration": 25},
            {"name": "Hair Treatment", "price": 800, "duration": 60},
        ],
        "experience": 8,
        "specialties": ["Premium Cuts", "Hair Treatments"],
        "description": "Premium barber shop for the modern gentleman",
    },
    {
        "email": "classic@barberconnect.test",
        "name": "Classic Barbers",
        "shop_name": "Classic Barbers",
        "location": {"address": "789 Oak Street", "city": "Mumbai", "state": "Maharashtra", "zip_code": "400003"},
        "services": [
            {"name": "Classic Haircut", "price": 250, "duration": 30},
            {"name": "Shave", "price": 180, "duration": 20},
            {"name": "Kids Haircut", "price": 150, "duration": 25},
        ],
        "experience": 3,
        "specialties": ["Classic Cuts", "Kids Haircuts"],
        "description": "Traditional barber shop with classic techniques",
    },
]


def seed_barbers(session: Session, password_hash: str) -> int:
    """Create the sample barber users and profiles that don't exist yet."""
    created = 0
    for sample in SAMPLE_BARBERS:
        user = session.exec(select(User).where(User.email == sample["email"])).first()
        if user is None:
            user = User(email=sample["email"], name=sample["name"], password_hash=password_hash, role="barber")
            session.add(user)
            session.commit()
            session.refresh(user)

        profile = session.exec(select(BarberProfile).where(BarberProfile.user_id == user.id)).first()
        if profile is not None:
            continue

        session.add(BarberProfile(
            user_id=user.id,
            shop_name=sample["shop_name"],
            location=sample["location"],
            services=sample["services"],
            experience=sample["experience"],
            specialties=sample["specialties"],
            working_hours=default_working_hours(),
            description=sample["description"],
        ))
        session.commit()
        created += 1

    logger.info(f"Seeded {created} barber profiles")
    return created


if __name__ == "__main__":
    from .auth import hash_password
    from .db import create_db_and_tables, engine

    logging.basicConfig(level=logging.INFO)
    create_db_and_tables()
    with Session(engine) as session:
        seed_barbers(session, hash_password("barber-password"))
