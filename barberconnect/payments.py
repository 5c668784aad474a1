# barberconnect/payments.py
"""
Simulated payment flow.

The gateway is a stub with the two calls a real provider exposes: create an
order for an amount in minor units, then verify the signature the client
returns after paying. ``get_payment_gateway`` is a FastAPI dependency so a
real gateway (or a test double) can be swapped in without touching the
coordinator functions below.
"""

import logging
import secrets
import string
import time
from decimal import Decimal, ROUND_HALF_UP

from sqlmodel import Session

from .config import PAYMENT_CURRENCY, ENABLE_PAYMENT_SIMULATION
from .deps import authorize
from .errors import AlreadyPaid, Forbidden, VerificationFailed
from .models import Appointment, utcnow
from .schemas import PaymentStatus

logger = logging.getLogger(__name__)

_ALPHABET = string.ascii_lowercase + string.digits


def _millis() -> int:
    return int(time.time() * 1000)


class DummyPaymentGateway:
    """Stand-in for a hosted checkout provider. Never moves money."""

    def create_order(self, amount: int, currency: str, receipt: str) -> dict:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
        return {
            "id": f"order_{_millis()}_{suffix}",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }

    def verify_payment(self, order_id: str, payment_id: str, signature: str) -> bool:
        # TODO: check an HMAC of order_id|payment_id once a real provider is wired in
        return True


gateway = DummyPaymentGateway()


def get_payment_gateway():
    return gateway


def to_minor_units(amount) -> int:
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _ensure_unpaid(appointment: Appointment):
    if appointment.payment_status != PaymentStatus.pending.value:
        raise AlreadyPaid("Payment already processed for this appointment")


def _mark_paid(session: Session, appointment: Appointment, payment_id: str) -> Appointment:
    appointment.payment_status = PaymentStatus.paid.value
    appointment.payment_id = payment_id
    appointment.updated_at = utcnow()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    logger.info(f"Appointment {appointment.id} paid with {payment_id}")
    return appointment


def create_order(session: Session, appointment: Appointment, user: dict, payment_gateway=None) -> dict:
    authorize(user, appointment, "payment:create_order")
    _ensure_unpaid(appointment)

    payment_gateway = payment_gateway or gateway
    order = payment_gateway.create_order(
        to_minor_units(appointment.total_amount),
        PAYMENT_CURRENCY,
        f"appointment_{appointment.id}",
    )
    logger.info(f"Created payment order {order['id']} for appointment {appointment.id}")
    return {
        "order_id": order["id"],
        "amount": order["amount"],
        "currency": order["currency"],
        "appointment_id": appointment.id,
    }


def verify_payment(
    session: Session,
    appointment: Appointment,
    user: dict,
    order_id: str,
    payment_id: str,
    signature: str,
    payment_gateway=None,
) -> Appointment:
    authorize(user, appointment, "payment:verify")
    _ensure_unpaid(appointment)

    payment_gateway = payment_gateway or gateway
    if not payment_gateway.verify_payment(order_id, payment_id, signature):
        logger.warning(f"Payment verification failed for appointment {appointment.id} (order {order_id})")
        raise VerificationFailed("Invalid payment verification")

    return _mark_paid(session, appointment, payment_id)


def simulate_payment(session: Session, appointment: Appointment, user: dict) -> Appointment:
    authorize(user, appointment, "payment:simulate")
    if not ENABLE_PAYMENT_SIMULATION:
        raise Forbidden("Payment simulation is disabled")
    _ensure_unpaid(appointment)

    return _mark_paid(session, appointment, f"sim_{_millis()}")


def payment_status(appointment: Appointment, user: dict) -> dict:
    authorize(user, appointment, "payment:view")
    return {
        "payment_status": appointment.payment_status,
        "payment_id": appointment.payment_id,
        "total_amount": appointment.total_amount,
    }
