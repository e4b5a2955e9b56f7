"""
Gateway de armazenamento: a única camada que consulta ou altera o banco.

Cada método corresponde a um padrão de acesso e devolve os esquemas pydantic
de schemas.py, nunca objetos ORM. As leituras com join já devolvem o
agendamento com médico (e paciente, na visão do admin) embutidos.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from . import models, schemas
from .errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class DatabaseStorage:
    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def _insert(self, row):
        try:
            self.session.add(row)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return row

    # ----- Users -----

    def get_user(self, user_id):
        user = self.session.get(models.User, user_id)
        return schemas.User.model_validate(user) if user else None

    def get_user_by_username(self, username):
        user = self.session.execute(
            select(models.User).where(models.User.username == username)
        ).scalar_one_or_none()
        return schemas.User.model_validate(user) if user else None

    def create_user(self, data):
        try:
            user = self._insert(models.User(**data.model_dump()))
        except IntegrityError as e:
            raise Conflict("Username already exists") from e
        return schemas.User.model_validate(user)

    # ----- Doctors -----

    def get_doctors(self):
        doctors = self.session.execute(select(models.Doctor)).scalars().all()
        return [schemas.Doctor.model_validate(d) for d in doctors]

    def get_doctor(self, doctor_id):
        doctor = self.session.get(models.Doctor, doctor_id)
        return schemas.Doctor.model_validate(doctor) if doctor else None

    def create_doctor(self, data):
        doctor = self._insert(models.Doctor(**data.model_dump()))
        return schemas.Doctor.model_validate(doctor)

    # ----- Appointments -----

    def get_appointments(self):
        rows = self.session.execute(
            select(models.Appointment, models.Doctor, models.User)
            .join(models.Doctor, models.Appointment.doctor_id == models.Doctor.id)
            .join(models.User, models.Appointment.patient_id == models.User.id)
            .order_by(models.Appointment.date.desc())
        ).all()
        return [
            schemas.AppointmentDetail(
                **schemas.Appointment.model_validate(appointment).model_dump(),
                doctor=schemas.Doctor.model_validate(doctor),
                patient=schemas.User.model_validate(patient),
            )
            for appointment, doctor, patient in rows
        ]

    def get_appointments_by_patient(self, patient_id):
        rows = self.session.execute(
            select(models.Appointment, models.Doctor)
            .join(models.Doctor, models.Appointment.doctor_id == models.Doctor.id)
            .where(models.Appointment.patient_id == patient_id)
            .order_by(models.Appointment.date.desc())
        ).all()
        return [
            schemas.AppointmentWithDoctor(
                **schemas.Appointment.model_validate(appointment).model_dump(),
                doctor=schemas.Doctor.model_validate(doctor),
            )
            for appointment, doctor in rows
        ]

    def create_appointment(self, data):
        # status nunca vem do cliente: todo agendamento nasce pendente
        row = models.Appointment(**data.model_dump(), status="pending")
        try:
            appointment = self._insert(row)
        except IntegrityError as e:
            raise NotFound("Patient or doctor not found") from e
        return schemas.Appointment.model_validate(appointment)

    def update_appointment_status(self, appointment_id, status):
        appointment = self.session.get(models.Appointment, appointment_id)
        if appointment is None:
            return None
        appointment.status = status
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return schemas.Appointment.model_validate(appointment)

    # ----- Reports -----

    def get_reports_by_patient(self, patient_id):
        reports = self.session.execute(
            select(models.Report).where(models.Report.patient_id == patient_id)
        ).scalars().all()
        return [schemas.Report.model_validate(r) for r in reports]

    def create_report(self, data):
        try:
            report = self._insert(models.Report(**data.model_dump()))
        except IntegrityError as e:
            raise NotFound("Patient not found") from e
        return schemas.Report.model_validate(report)
