import datetime

import pytest

from medportal.errors import Conflict, NotFound
from medportal.schemas import InsertAppointment, InsertDoctor, InsertReport, InsertUser


def make_user(storage, username="alice", role="patient"):
    return storage.create_user(InsertUser(
        username=username,
        password="hashed",
        role=role,
        name=username.title(),
        email=f"{username}@example.com",
        mobile="555-0100",
    ))


def make_doctor(storage, name="Dr. House", specialization="Diagnostics"):
    return storage.create_doctor(InsertDoctor(
        name=name,
        specialization=specialization,
        bio="Grumpy.",
        image_url="https://example.com/house.jpg",
        availability="Mon-Fri",
        experience=20,
        rating="4.2",
    ))


def book(storage, patient, doctor, date, reason="Checkup"):
    return storage.create_appointment(InsertAppointment(
        patient_id=patient.id, doctor_id=doctor.id, date=date, reason=reason,
    ))


def test_create_user_then_lookup_by_username(storage):
    user = make_user(storage)
    assert user.id is not None
    assert user.created_at is not None

    found = storage.get_user_by_username("alice")
    assert found == user
    assert found.password == "hashed"
    assert storage.get_user(user.id) == user


def test_missing_user_lookups_return_none(storage):
    assert storage.get_user(999) is None
    assert storage.get_user_by_username("nobody") is None


def test_duplicate_username_conflicts(storage):
    first = make_user(storage)
    with pytest.raises(Conflict):
        make_user(storage)
    # o primeiro registro continua intacto e a sessão segue utilizável
    assert storage.get_user_by_username("alice") == first
    assert make_user(storage, "bob").username == "bob"


def test_doctor_round_trip(storage):
    data = InsertDoctor(
        name="Dr. Grey",
        specialization="Surgery",
        bio="Seattle.",
        image_url="https://example.com/grey.jpg",
        availability="Weekends",
    )
    doctor = storage.create_doctor(data)
    fetched = storage.get_doctor(doctor.id)
    assert fetched.model_dump(exclude={"id"}) == data.model_dump()
    assert fetched.experience == 0
    assert fetched.rating == "5.0"
    assert storage.get_doctor(doctor.id + 100) is None


def test_get_doctors_lists_everything(storage):
    assert storage.get_doctors() == []
    make_doctor(storage, "Dr. A")
    make_doctor(storage, "Dr. B")
    assert sorted(d.name for d in storage.get_doctors()) == ["Dr. A", "Dr. B"]


def test_create_appointment_is_always_pending(storage):
    patient = make_user(storage)
    doctor = make_doctor(storage)
    appointment = book(storage, patient, doctor, datetime.datetime(2030, 1, 1, 9))
    assert appointment.status == "pending"
    assert appointment.patient_id == patient.id
    assert appointment.created_at is not None


def test_create_appointment_with_unknown_references(storage):
    patient = make_user(storage)
    doctor = make_doctor(storage)
    with pytest.raises(NotFound):
        storage.create_appointment(InsertAppointment(
            patient_id=patient.id, doctor_id=doctor.id + 50,
            date=datetime.datetime(2030, 1, 1), reason="x",
        ))
    with pytest.raises(NotFound):
        storage.create_appointment(InsertAppointment(
            patient_id=patient.id + 50, doctor_id=doctor.id,
            date=datetime.datetime(2030, 1, 1), reason="x",
        ))


def test_appointments_by_patient_are_filtered_joined_and_sorted(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    house = make_doctor(storage, "Dr. House")
    grey = make_doctor(storage, "Dr. Grey")
    book(storage, alice, house, datetime.datetime(2030, 1, 1))
    book(storage, alice, grey, datetime.datetime(2030, 3, 1))
    book(storage, bob, house, datetime.datetime(2030, 2, 1))

    appointments = storage.get_appointments_by_patient(alice.id)
    assert [a.date.month for a in appointments] == [3, 1]
    assert all(a.patient_id == alice.id for a in appointments)
    for a in appointments:
        assert a.doctor == storage.get_doctor(a.doctor_id)
    assert not hasattr(appointments[0], "patient")


def test_all_appointments_join_doctor_and_patient(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    house = make_doctor(storage)
    book(storage, alice, house, datetime.datetime(2030, 1, 1))
    book(storage, bob, house, datetime.datetime(2030, 2, 1))

    appointments = storage.get_appointments()
    assert [a.patient.username for a in appointments] == ["bob", "alice"]
    assert all(a.doctor.id == house.id for a in appointments)
    assert "password" not in appointments[0].to_json()["patient"]


def test_update_appointment_status(storage):
    patient = make_user(storage)
    doctor = make_doctor(storage)
    appointment = book(storage, patient, doctor, datetime.datetime(2030, 1, 1))

    updated = storage.update_appointment_status(appointment.id, "confirmed")
    assert updated.id == appointment.id
    assert updated.status == "confirmed"
    assert storage.get_appointments_by_patient(patient.id)[0].status == "confirmed"


def test_update_status_of_unknown_appointment(storage):
    assert storage.update_appointment_status(404, "confirmed") is None
    assert storage.get_appointments() == []


def test_reports_by_patient(storage):
    alice = make_user(storage, "alice")
    bob = make_user(storage, "bob")
    report = storage.create_report(InsertReport(
        patient_id=alice.id, title="Chest X-ray", file_url="https://files/x1", type="xray",
    ))
    storage.create_report(InsertReport(
        patient_id=bob.id, title="Blood test", file_url="https://files/b1", type="report",
    ))

    assert report.date is not None
    assert storage.get_reports_by_patient(alice.id) == [report]
    assert storage.get_reports_by_patient(999) == []


def test_report_for_unknown_patient(storage):
    with pytest.raises(NotFound):
        storage.create_report(InsertReport(
            patient_id=42, title="Ghost", file_url="https://files/g", type="prescription",
        ))
