# barberconnect/booking.py
"""
Booking validation and appointment creation.

A booking request names services from a barber's catalog. Prices and
durations are resolved from the catalog and copied onto the appointment as
snapshots, so later catalog edits never change what was booked.

The slot check here gives the caller a clean error before anything is
written. Mutual exclusion itself comes from the partial unique index on
Appointment (barber, date, time) over active statuses: an insert that loses
a race against a concurrent booking fails on commit and is reported as the
same SlotConflictError.
"""

import logging
from datetime import datetime, date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .catalog import Catalog, get_catalog
from .errors import InvalidService, PastDateError, SlotConflictError
from .models import Appointment
from .schemas import AppointmentCreate, AppointmentStatus, PaymentStatus

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (AppointmentStatus.pending.value, AppointmentStatus.approved.value)


def parse_slot(appointment_date: date, appointment_time: str) -> datetime:
    return datetime.combine(appointment_date, datetime.strptime(appointment_time, "%H:%M").time())


def find_conflicting_appointment(
    session: Session,
    barber_id: int,
    appointment_date: date,
    appointment_time: str,
) -> Optional[Appointment]:
    return session.exec(
        select(Appointment)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date == appointment_date)
        .where(Appointment.appointment_time == appointment_time)
        .where(Appointment.status.in_(ACTIVE_STATUSES))
    ).first()


def price_services(catalog: Catalog, service_names: List[str]) -> Tuple[List[dict], float]:
    """Resolve requested names to snapshots, in request order, and total them."""
    snapshots = []
    total_amount = Decimal("0")
    for name in service_names:
        service = catalog.find_service(name)
        if service is None:
            raise InvalidService(f"Service {name} not found for this barber")
        snapshots.append({
            "name": service["name"],
            "price": service["price"],
            "duration": service.get("duration", 30),
        })
        total_amount += Decimal(str(service["price"]))
    return snapshots, float(total_amount)


def validate_and_price(
    session: Session,
    barber_profile_id: int,
    service_names: List[str],
    appointment_date: date,
    appointment_time: str,
    now: Optional[datetime] = None,
) -> Tuple[Catalog, List[dict], float]:
    # 1) Resolve the barber's catalog
    catalog = get_catalog(session, barber_profile_id)

    # 2) Validate services and compute the total
    snapshots, total_amount = price_services(catalog, service_names)

    # 3) Prevent booking in the past (naive local time)
    if now is None:
        now = datetime.now()
    if parse_slot(appointment_date, appointment_time) <= now:
        raise PastDateError("Appointment date must be in the future")

    # 4) Reject a slot already held by a pending or approved appointment
    conflict = find_conflicting_appointment(
        session, catalog.profile.user_id, appointment_date, appointment_time
    )
    if conflict is not None:
        raise SlotConflictError("This time slot is already booked")

    return catalog, snapshots, total_amount


def book_appointment(
    session: Session,
    customer: dict,
    request: AppointmentCreate,
    now: Optional[datetime] = None,
) -> Appointment:
    catalog, snapshots, total_amount = validate_and_price(
        session,
        request.barber_profile_id,
        request.services,
        request.appointment_date,
        request.appointment_time,
        now=now,
    )

    db_appt = Appointment(
        customer_id=customer["id"],
        barber_id=catalog.profile.user_id,
        barber_profile_id=catalog.profile.id,
        services=snapshots,
        appointment_date=request.appointment_date,
        appointment_time=request.appointment_time,
        total_amount=total_amount,
        status=AppointmentStatus.pending.value,
        payment_status=PaymentStatus.pending.value,
        notes=request.notes.strip() if request.notes else None,
    )

    session.add(db_appt)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning(
            f"Slot race lost for barber {catalog.profile.user_id} on "
            f"{request.appointment_date} {request.appointment_time}"
        )
        raise SlotConflictError("This time slot is already booked")

    session.refresh(db_appt)  # fills db_appt.id
    logger.info(
        f"Booked appointment {db_appt.id} for customer {customer['id']} with barber "
        f"{db_appt.barber_id} on {db_appt.appointment_date} {db_appt.appointment_time} "
        f"(total {db_appt.total_amount})"
    )
    return db_appt
