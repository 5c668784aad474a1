# tests/test_payments.py

import pytest

from barberconnect import payments
from barberconnect.errors import AlreadyPaid, Forbidden, VerificationFailed
from barberconnect.payments import (
    create_order,
    payment_status,
    simulate_payment,
    to_minor_units,
    verify_payment,
)


class RejectingGateway(payments.DummyPaymentGateway):
    def verify_payment(self, order_id, payment_id, signature):
        return False


@pytest.mark.parametrize("amount, minor", [(450, 45000), (0, 0), (12.345, 1235), (99.99, 9999)])
def test_minor_units(amount, minor):
    assert to_minor_units(amount) == minor


def test_create_order_echoes_amount_in_minor_units(session, customer, make_appointment):
    appt = make_appointment()
    order = create_order(session, appt, customer)

    assert order["order_id"].startswith("order_")
    assert order["amount"] == 30000
    assert order["currency"] == "INR"
    assert order["appointment_id"] == appt.id


def test_create_order_only_for_owning_customer(session, other_customer, barber, make_appointment):
    appt = make_appointment()
    with pytest.raises(Forbidden):
        create_order(session, appt, other_customer)
    with pytest.raises(Forbidden):
        create_order(session, appt, barber)


def test_create_order_rejects_paid_appointment(session, customer, make_appointment):
    appt = make_appointment(payment_status="paid")
    with pytest.raises(AlreadyPaid):
        create_order(session, appt, customer)


def test_verify_marks_paid(session, customer, make_appointment):
    appt = make_appointment()
    paid = verify_payment(session, appt, customer, "order_1", "pay_1", "sig")
    assert paid.payment_status == "paid"
    assert paid.payment_id == "pay_1"
    assert paid.status == "pending"


def test_failed_verification_writes_nothing(session, customer, make_appointment):
    appt = make_appointment()
    with pytest.raises(VerificationFailed):
        verify_payment(session, appt, customer, "order_1", "pay_1", "bad", RejectingGateway())
    session.refresh(appt)
    assert appt.payment_status == "pending"
    assert appt.payment_id is None


def test_simulate_marks_paid(session, customer, make_appointment):
    appt = make_appointment()
    paid = simulate_payment(session, appt, customer)
    assert paid.payment_status == "paid"
    assert paid.payment_id.startswith("sim_")


def test_second_payment_does_not_overwrite(session, customer, make_appointment):
    appt = make_appointment()
    verify_payment(session, appt, customer, "order_1", "pay_1", "sig")
    with pytest.raises(AlreadyPaid):
        simulate_payment(session, appt, customer)
    with pytest.raises(AlreadyPaid):
        verify_payment(session, appt, customer, "order_2", "pay_2", "sig")
    assert appt.payment_id == "pay_1"


def test_simulation_can_be_disabled(session, customer, make_appointment, monkeypatch):
    monkeypatch.setattr(payments, "ENABLE_PAYMENT_SIMULATION", False)
    appt = make_appointment()
    with pytest.raises(Forbidden):
        simulate_payment(session, appt, customer)


def test_payment_is_independent_of_status(session, customer, make_appointment):
    appt = make_appointment(status="completed")
    assert payment_status(appt, customer)["payment_status"] == "pending"


def test_payment_status_visibility(session, customer, barber, other_customer, admin, make_appointment):
    appt = make_appointment()
    for user in (customer, barber, admin):
        assert payment_status(appt, user)["total_amount"] == 300
    with pytest.raises(Forbidden):
        payment_status(appt, other_customer)
