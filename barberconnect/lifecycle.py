# barberconnect/lifecycle.py
"""
Appointment status workflow.

    pending  -> approved | rejected | cancelled
    approved -> completed | cancelled

completed, rejected and cancelled are terminal. Barbers drive approval,
rejection and completion; only the booking customer can cancel. Payment
status is independent of this workflow and is never touched here.
"""

import logging
from typing import Optional

from sqlmodel import Session

from .deps import authorize
from .errors import InvalidTransition, NotFound
from .models import Appointment, utcnow
from .schemas import AppointmentStatus, CancelledBy

logger = logging.getLogger(__name__)

TRANSITIONS = {
    AppointmentStatus.pending: {
        AppointmentStatus.approved,
        AppointmentStatus.rejected,
        AppointmentStatus.cancelled,
    },
    AppointmentStatus.approved: {
        AppointmentStatus.completed,
        AppointmentStatus.cancelled,
    },
    AppointmentStatus.rejected: set(),
    AppointmentStatus.completed: set(),
    AppointmentStatus.cancelled: set(),
}

BARBER_TARGETS = {
    AppointmentStatus.approved,
    AppointmentStatus.rejected,
    AppointmentStatus.completed,
}


def get_appointment(session: Session, appointment_id: int) -> Appointment:
    appointment = session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound("Appointment not found")
    return appointment


def can_transition(current, target) -> bool:
    return AppointmentStatus(target) in TRANSITIONS[AppointmentStatus(current)]


def _apply(session: Session, appointment: Appointment, target: AppointmentStatus) -> Appointment:
    previous = appointment.status
    appointment.status = target.value
    appointment.updated_at = utcnow()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    logger.info(f"Appointment {appointment.id} moved {previous} -> {appointment.status}")
    return appointment


def update_status(
    session: Session,
    appointment: Appointment,
    user: dict,
    new_status: AppointmentStatus,
    cancellation_reason: Optional[str] = None,
) -> Appointment:
    authorize(user, appointment, "appointment:update_status")

    target = AppointmentStatus(new_status)
    if target not in BARBER_TARGETS or not can_transition(appointment.status, target):
        raise InvalidTransition(
            f"Cannot change appointment status from {appointment.status} to {target.value}"
        )

    if cancellation_reason:
        appointment.cancellation_reason = cancellation_reason.strip()
    return _apply(session, appointment, target)


def cancel_appointment(
    session: Session,
    appointment: Appointment,
    user: dict,
    cancellation_reason: Optional[str] = None,
) -> Appointment:
    authorize(user, appointment, "appointment:cancel")

    if not can_transition(appointment.status, AppointmentStatus.cancelled):
        raise InvalidTransition("Appointment cannot be cancelled")

    appointment.cancelled_by = CancelledBy.customer.value
    if cancellation_reason:
        appointment.cancellation_reason = cancellation_reason.strip()
    return _apply(session, appointment, AppointmentStatus.cancelled)
