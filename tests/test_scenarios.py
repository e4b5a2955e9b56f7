import datetime

from .conftest import register


def test_seeded_doctors_on_empty_store(client):
    resp = client.get("/api/doctors")
    assert resp.status_code == 200
    doctors = {(d["name"], d["specialization"]) for d in resp.get_json()}
    assert doctors == {
        ("Dr. Sarah Johnson", "Cardiology"),
        ("Dr. Michael Chen", "Pediatrics"),
        ("Dr. Emily Wilson", "Neurology"),
    }


def test_seed_is_skipped_when_doctors_exist(app):
    from medportal.seed import seed_doctors

    with app.app_context():
        assert seed_doctors(app.extensions["storage"]) == 0
    assert len(app.test_client().get("/api/doctors").get_json()) == 3


def test_booking_confirmed_by_admin(app):
    patient = app.test_client()
    register(patient, "alice")
    patient.post("/api/logout")
    login = patient.post("/api/login", json={"username": "alice", "password": "secret123"})
    assert login.status_code == 200

    doctor_id = patient.get("/api/doctors").get_json()[0]["id"]
    date = datetime.datetime.now() + datetime.timedelta(days=3)
    resp = patient.post("/api/appointments", json={
        "doctorId": doctor_id,
        "date": date.isoformat(),
        "reason": "Annual checkup",
    })
    assert resp.status_code == 201
    appointment = resp.get_json()
    assert appointment["status"] == "pending"

    admin = app.test_client()
    register(admin, "root", role="admin")
    resp = admin.patch(
        f"/api/appointments/{appointment['id']}/status", json={"status": "confirmed"}
    )
    assert resp.status_code == 200

    mine = patient.get("/api/appointments").get_json()
    assert [(a["id"], a["status"]) for a in mine] == [(appointment["id"], "confirmed")]


def test_patient_cannot_create_doctor(app):
    patient = app.test_client()
    register(patient, "alice")
    resp = patient.post("/api/doctors", json={
        "name": "Dr. Fake",
        "specialization": "Nothing",
        "bio": "-",
        "imageUrl": "https://example.com/fake.jpg",
        "availability": "Never",
    })
    assert resp.status_code == 401
    assert len(patient.get("/api/doctors").get_json()) == 3
