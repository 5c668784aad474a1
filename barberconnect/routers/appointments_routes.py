# barberconnect/routers/appointments_routes.py

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlmodel import Session, select

from barberconnect.db import get_session
from barberconnect.models import Appointment
from barberconnect.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentListResponse,
    AppointmentStatus,
    AppointmentStatusUpdate,
    AppointmentCancel,
)
from barberconnect.auth import get_current_user
from barberconnect.deps import require_role, authorize
from barberconnect.booking import book_appointment
from barberconnect.lifecycle import get_appointment, update_status, cancel_appointment


router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "customer")  # only customers book
    return book_appointment(session, current_user, appt)


@router.get("", response_model=AppointmentListResponse)
def list_appointments(
    status: Optional[AppointmentStatus] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    stmt = select(Appointment)
    count_stmt = select(func.count(Appointment.id))

    # customers and barbers only see their own, admins see everything
    if current_user["role"] == "customer":
        stmt = stmt.where(Appointment.customer_id == current_user["id"])
        count_stmt = count_stmt.where(Appointment.customer_id == current_user["id"])
    elif current_user["role"] == "barber":
        stmt = stmt.where(Appointment.barber_id == current_user["id"])
        count_stmt = count_stmt.where(Appointment.barber_id == current_user["id"])

    if status is not None:
        stmt = stmt.where(Appointment.status == status.value)
        count_stmt = count_stmt.where(Appointment.status == status.value)

    stmt = (
        stmt.order_by(Appointment.appointment_date.desc(), Appointment.appointment_time.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )

    appts = session.exec(stmt).all()
    total = session.exec(count_stmt).one()
    return {
        "appointments": appts,
        "total_pages": math.ceil(total / limit),
        "current_page": page,
        "total": total,
    }


@router.get("/{appt_id}", response_model=AppointmentPublic)
def get_one_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    appointment = get_appointment(session, appt_id)
    authorize(current_user, appointment, "appointment:view")
    return appointment


@router.put("/{appt_id}/status", response_model=AppointmentPublic)
def change_status(
    appt_id: int,
    body: AppointmentStatusUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    appointment = get_appointment(session, appt_id)
    return update_status(session, appointment, current_user, body.status, body.cancellation_reason)


@router.put("/{appt_id}/cancel", response_model=AppointmentPublic)
def cancel(
    appt_id: int,
    body: Optional[AppointmentCancel] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    appointment = get_appointment(session, appt_id)
    reason = body.cancellation_reason if body else None
    return cancel_appointment(session, appointment, current_user, reason)
