# barberconnect/routers/barbers_routes.py

import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from barberconnect.db import get_session
from barberconnect.models import BarberProfile, utcnow
from barberconnect.schemas import (
    BarberProfileCreate,
    BarberProfileUpdate,
    BarberProfilePublic,
    BarberListResponse,
    ServicesUpdate,
)
from barberconnect.auth import get_current_user
from barberconnect.deps import require_role, authorize
from barberconnect.errors import NotFound, ProfileExists
from barberconnect.data import default_working_hours

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/barbers",
    tags=["barbers"],
)


def get_profile(session: Session, profile_id: int) -> BarberProfile:
    profile = session.get(BarberProfile, profile_id)
    if profile is None:
        raise NotFound("Barber profile not found")
    return profile


def check_unique_service_names(services: list):
    names = [s["name"] for s in services]
    if len(names) != len(set(names)):
        raise HTTPException(status_code=422, detail="Service names must be unique")


@router.get("", response_model=BarberListResponse)
def list_barbers(
    city: Optional[str] = None,
    min_rating: Optional[float] = Query(default=None, ge=0, le=5),
    service: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_session),
):
    profiles = session.exec(
        select(BarberProfile)
        .where(BarberProfile.is_active == True)  # noqa: E712
        .order_by(BarberProfile.rating.desc(), BarberProfile.total_reviews.desc())
    ).all()

    # location and services are JSON documents, filter them here
    matches = []
    for p in profiles:
        if city and city.lower() not in (p.location or {}).get("city", "").lower():
            continue
        if min_rating is not None and p.rating < min_rating:
            continue
        if service and not any(service.lower() in s["name"].lower() for s in p.services or []):
            continue
        matches.append(p)

    total = len(matches)
    start = (page - 1) * limit
    return {
        "barbers": matches[start:start + limit],
        "total_pages": math.ceil(total / limit),
        "current_page": page,
        "total": total,
    }


@router.get("/profile/me", response_model=BarberProfilePublic)
def get_my_profile(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "barber")

    profile = session.exec(
        select(BarberProfile).where(BarberProfile.user_id == current_user["id"])
    ).first()
    if profile is None:
        raise NotFound("Barber profile not found")
    return profile


@router.get("/{profile_id}", response_model=BarberProfilePublic)
def get_barber(profile_id: int, session: Session = Depends(get_session)):
    return get_profile(session, profile_id)


@router.post("", response_model=BarberProfilePublic, status_code=201)
def create_profile(
    data: BarberProfileCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "barber")  # only barbers own shops

    existing = session.exec(
        select(BarberProfile).where(BarberProfile.user_id == current_user["id"])
    ).first()
    if existing is not None:
        raise ProfileExists("Barber profile already exists")

    payload = data.model_dump()
    check_unique_service_names(payload["services"])
    if payload["working_hours"] is None:
        payload["working_hours"] = default_working_hours()

    profile = BarberProfile(user_id=current_user["id"], **payload)
    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info(f"Barber {current_user['id']} created profile {profile.id} ({profile.shop_name})")
    return profile


@router.put("/{profile_id}", response_model=BarberProfilePublic)
def update_profile(
    profile_id: int,
    data: BarberProfileUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    profile = get_profile(session, profile_id)
    authorize(current_user, profile, "profile:update")

    changes = data.model_dump(exclude_unset=True)
    if changes.get("services") is not None:
        check_unique_service_names(changes["services"])
    for key, value in changes.items():
        if value is None:
            continue
        setattr(profile, key, value)
    profile.updated_at = utcnow()

    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


@router.put("/{profile_id}/services", response_model=BarberProfilePublic)
def update_services(
    profile_id: int,
    data: ServicesUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    profile = get_profile(session, profile_id)
    authorize(current_user, profile, "profile:update")

    services = [s.model_dump() for s in data.services]
    check_unique_service_names(services)

    # booked appointments keep their own snapshots, only new bookings see this
    profile.services = services
    profile.updated_at = utcnow()
    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info(f"Profile {profile.id} now offers {len(services)} services")
    return profile


@router.delete("/{profile_id}")
def delete_profile(
    profile_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    profile = get_profile(session, profile_id)
    authorize(current_user, profile, "profile:delete")

    # appointments reference the profile forever, so it is only deactivated
    profile.is_active = False
    profile.updated_at = utcnow()
    session.add(profile)
    session.commit()
    logger.info(f"Profile {profile_id} deactivated")

    return {"message": "Barber profile deleted"}
