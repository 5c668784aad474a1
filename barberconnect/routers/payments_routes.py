# barberconnect/routers/payments_routes.py

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barberconnect.db import get_session
from barberconnect.schemas import (
    PaymentOrderRequest,
    PaymentOrder,
    PaymentVerifyRequest,
    PaymentConfirmation,
    PaymentStatusResponse,
)
from barberconnect.auth import get_current_user
from barberconnect.lifecycle import get_appointment
from barberconnect import payments

router = APIRouter(
    prefix="/payments",
    tags=["payments"],
)


@router.post("/create-order", response_model=PaymentOrder)
def create_order(
    body: PaymentOrderRequest,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
    gateway=Depends(payments.get_payment_gateway),
):
    appointment = get_appointment(session, body.appointment_id)
    return payments.create_order(session, appointment, current_user, gateway)


@router.post("/verify", response_model=PaymentConfirmation)
def verify(
    body: PaymentVerifyRequest,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
    gateway=Depends(payments.get_payment_gateway),
):
    appointment = get_appointment(session, body.appointment_id)
    appointment = payments.verify_payment(
        session,
        appointment,
        current_user,
        body.order_id,
        body.payment_id,
        body.signature,
        gateway,
    )
    return {"message": "Payment verified successfully", "appointment": appointment}


@router.post("/simulate", response_model=PaymentConfirmation)
def simulate(
    body: PaymentOrderRequest,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    appointment = get_appointment(session, body.appointment_id)
    appointment = payments.simulate_payment(session, appointment, current_user)
    return {"message": "Payment simulated successfully", "appointment": appointment}


@router.get("/status/{appointment_id}", response_model=PaymentStatusResponse)
def status(
    appointment_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    appointment = get_appointment(session, appointment_id)
    return payments.payment_status(appointment, current_user)
