# barberconnect/catalog.py

from dataclasses import dataclass
from typing import List

from sqlmodel import Session

from .errors import NotFound
from .models import BarberProfile


@dataclass(frozen=True)
class Catalog:
    profile: BarberProfile
    services: List[dict]
    working_hours: dict

    def find_service(self, name: str):
        # exact, case-sensitive match on the published name
        for service in self.services:
            if service["name"] == name:
                return service
        return None


def get_catalog(session: Session, barber_profile_id: int) -> Catalog:
    profile = session.get(BarberProfile, barber_profile_id)
    # deactivated shops keep their history but take no new bookings
    if profile is None or not profile.is_active:
        raise NotFound("Barber not found")

    return Catalog(
        profile=profile,
        services=list(profile.services or []),
        working_hours=dict(profile.working_hours or {}),
    )
