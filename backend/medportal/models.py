import datetime
import sqlite3
from typing import get_args

from sqlalchemy import event
from sqlalchemy.engine import Engine

from . import db
from .schemas import AppointmentStatus, ReportType, Role


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def _enum(literal, name):
    return db.Enum(
        *get_args(literal),
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
    )


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite só aplica as chaves estrangeiras com o pragma ligado
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.Text, unique=True, nullable=False)
    password = db.Column(db.Text, nullable=False)
    role = db.Column(_enum(Role, "user_role"), nullable=False, default="patient")
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False)
    mobile = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)

    appointments = db.relationship("Appointment", back_populates="patient", lazy=True)
    reports = db.relationship("Report", back_populates="patient", lazy=True)


class Doctor(db.Model):
    __tablename__ = "doctors"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    specialization = db.Column(db.Text, nullable=False)
    bio = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.Text, nullable=False)
    availability = db.Column(db.Text, nullable=False)  # ex.: "Mon-Fri 9am-5pm"
    experience = db.Column(db.Integer, default=0)
    rating = db.Column(db.Text, default="5.0")

    appointments = db.relationship("Appointment", back_populates="doctor", lazy=True)


class Appointment(db.Model):
    __tablename__ = "appointments"

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    doctor_id = db.Column(db.Integer, db.ForeignKey("doctors.id"), nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    status = db.Column(
        _enum(AppointmentStatus, "appointment_status"), nullable=False, default="pending"
    )
    created_at = db.Column(db.DateTime, default=utcnow)

    patient = db.relationship("User", back_populates="appointments")
    doctor = db.relationship("Doctor", back_populates="appointments")


class Report(db.Model):
    __tablename__ = "reports"

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    title = db.Column(db.Text, nullable=False)
    file_url = db.Column(db.Text, nullable=False)
    type = db.Column(_enum(ReportType, "report_type"), nullable=False)
    date = db.Column(db.DateTime, default=utcnow)

    patient = db.relationship("User", back_populates="reports")
