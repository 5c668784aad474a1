# tests/test_appointments_api.py

from conftest import auth_headers, future_date


def book(client, customer, profile, services=("Haircut", "BeardTrim"), appointment_time="10:00", day=7):
    return client.post(
        "/appointments",
        json={
            "barber_profile_id": profile.id,
            "services": list(services),
            "appointment_date": future_date(day),
            "appointment_time": appointment_time,
            "notes": "first visit",
        },
        headers=auth_headers(customer),
    )


def test_full_booking_flow(client, customer, barber, profile):
    resp = book(client, customer, profile)
    assert resp.status_code == 201
    appt = resp.json()
    assert appt["total_amount"] == 450
    assert appt["status"] == "pending"
    assert appt["payment_status"] == "pending"
    assert [s["name"] for s in appt["services"]] == ["Haircut", "BeardTrim"]

    resp = client.put(f"/appointments/{appt['id']}/status", json={"status": "approved"}, headers=auth_headers(barber))
    assert resp.status_code == 200
    assert resp.json()["status"] == "approved"

    resp = client.post("/payments/simulate", json={"appointment_id": appt["id"]}, headers=auth_headers(customer))
    assert resp.status_code == 200
    assert resp.json()["appointment"]["payment_status"] == "paid"

    resp = client.put(f"/appointments/{appt['id']}/status", json={"status": "completed"}, headers=auth_headers(barber))
    assert resp.json()["status"] == "completed"

    resp = client.post("/reviews", json={"appointment_id": appt["id"], "rating": 5}, headers=auth_headers(customer))
    assert resp.status_code == 201

    barber_profile = client.get(f"/barbers/{profile.id}").json()
    assert barber_profile["rating"] == 5.0
    assert barber_profile["total_reviews"] == 1

    resp = client.post("/reviews", json={"appointment_id": appt["id"], "rating": 4}, headers=auth_headers(customer))
    assert resp.status_code == 409
    assert resp.json()["code"] == "duplicate_review"

    resp = client.get(f"/appointments/{appt['id']}", headers=auth_headers(customer))
    assert resp.json()["is_rated"] is True
    assert resp.json()["total_amount"] == 450


def test_conflicting_slot_then_freed(client, customer, other_customer, profile):
    first = book(client, customer, profile).json()

    resp = book(client, other_customer, profile, services=["Haircut"])
    assert resp.status_code == 409
    assert resp.json() == {"detail": "This time slot is already booked", "code": "slot_conflict"}

    resp = client.put(f"/appointments/{first['id']}/cancel", json={"cancellation_reason": "sick"},
                      headers=auth_headers(customer))
    assert resp.json()["cancelled_by"] == "customer"

    assert book(client, other_customer, profile, services=["Haircut"]).status_code == 201


def test_booking_errors(client, customer, barber, profile):
    resp = book(client, customer, profile, services=["Perm"])
    assert resp.status_code == 422
    assert resp.json()["code"] == "invalid_service"

    resp = book(client, customer, profile, day=-1)
    assert resp.status_code == 422
    assert resp.json()["code"] == "past_date"

    resp = client.post(
        "/appointments",
        json={"barber_profile_id": 999, "services": ["Haircut"], "appointment_date": future_date(),
              "appointment_time": "10:00"},
        headers=auth_headers(customer),
    )
    assert resp.status_code == 404

    # barbers do not book
    assert book(client, barber, profile).status_code == 403


def test_request_validation(client, customer, profile):
    headers = auth_headers(customer)
    base = {"barber_profile_id": profile.id, "services": ["Haircut"], "appointment_date": future_date()}

    assert client.post("/appointments", json={**base, "appointment_time": "25:00"}, headers=headers).status_code == 422
    assert client.post("/appointments", json={**base, "appointment_time": "9:00"}, headers=headers).status_code == 422
    assert client.post("/appointments", json={**base, "services": [], "appointment_time": "09:00"},
                       headers=headers).status_code == 422


def test_requires_token(client, profile):
    assert client.get("/appointments").status_code == 401
    assert client.get("/appointments", headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_status_transition_errors(client, customer, barber, other_barber, profile):
    appt = book(client, customer, profile).json()
    url = f"/appointments/{appt['id']}/status"

    resp = client.put(url, json={"status": "completed"}, headers=auth_headers(barber))
    assert resp.status_code == 409
    assert resp.json()["code"] == "invalid_transition"

    assert client.put(url, json={"status": "approved"}, headers=auth_headers(other_barber)).status_code == 403
    assert client.put(url, json={"status": "approved"}, headers=auth_headers(customer)).status_code == 403
    assert client.put(url, json={"status": "bogus"}, headers=auth_headers(barber)).status_code == 422
    assert client.put("/appointments/999/status", json={"status": "approved"},
                      headers=auth_headers(barber)).status_code == 404

    resp = client.put(url, json={"status": "rejected", "cancellation_reason": "Fully booked"},
                      headers=auth_headers(barber))
    assert resp.json()["cancellation_reason"] == "Fully booked"

    resp = client.put(f"/appointments/{appt['id']}/cancel", headers=auth_headers(customer))
    assert resp.status_code == 409


def test_listing_is_scoped_by_role(client, customer, other_customer, barber, admin, profile):
    book(client, customer, profile, appointment_time="10:00")
    book(client, customer, profile, appointment_time="11:00")
    book(client, other_customer, profile, appointment_time="12:00")

    mine = client.get("/appointments", headers=auth_headers(customer)).json()
    assert mine["total"] == 2
    assert [a["appointment_time"] for a in mine["appointments"]] == ["11:00", "10:00"]

    assert client.get("/appointments", headers=auth_headers(barber)).json()["total"] == 3
    assert client.get("/appointments", headers=auth_headers(admin)).json()["total"] == 3

    page = client.get("/appointments?limit=2&page=2", headers=auth_headers(barber)).json()
    assert page["total_pages"] == 2
    assert len(page["appointments"]) == 1

    assert client.get("/appointments?status=approved", headers=auth_headers(barber)).json()["total"] == 0


def test_single_appointment_visibility(client, customer, other_customer, barber, profile):
    appt = book(client, customer, profile).json()
    url = f"/appointments/{appt['id']}"

    assert client.get(url, headers=auth_headers(customer)).status_code == 200
    assert client.get(url, headers=auth_headers(barber)).status_code == 200
    assert client.get(url, headers=auth_headers(other_customer)).status_code == 403
