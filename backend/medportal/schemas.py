"""
Esquemas pydantic das entidades.

Cada entidade tem duas variantes: a inserível (campos que o cliente pode
enviar) e o registro completo, que herda da inserível e acrescenta apenas os
campos atribuídos pelo servidor (id, timestamps, status).
O JSON trafega em camelCase (patientId, imageUrl, createdAt...).
"""
import datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Role = Literal["admin", "patient"]
AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled"]
ReportType = Literal["report", "xray", "prescription"]


def _reject_bool(value):
    # bool é subclasse de int; true/false não são números válidos aqui
    if isinstance(value, bool):
        raise ValueError("Input should be a valid integer")
    return value


Integer = Annotated[int, BeforeValidator(_reject_bool)]


class Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self):
        return self.model_dump(mode="json", by_alias=True)


# ----- Users -----

class InsertUser(Schema):
    username: str
    password: str
    role: Role = "patient"
    name: str
    email: str
    mobile: Optional[str] = None


class User(InsertUser):
    id: int
    # Nunca devolvemos o hash da senha ao cliente
    password: str = Field(exclude=True)
    created_at: Optional[datetime.datetime] = None


class LoginRequest(Schema):
    username: str
    password: str


# ----- Doctors -----

class InsertDoctor(Schema):
    name: str
    specialization: str
    bio: str
    image_url: str
    availability: str
    experience: Integer = 0
    rating: str = "5.0"


class Doctor(InsertDoctor):
    id: int


# ----- Appointments -----

class InsertAppointment(Schema):
    patient_id: Integer
    doctor_id: Integer
    date: datetime.datetime
    reason: str

    @field_validator("date")
    @classmethod
    def naive_utc(cls, value):
        """Datas com fuso são convertidas para UTC sem tzinfo, como o banco guarda."""
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value


class AppointmentRequest(InsertAppointment):
    # Opcional na rota: para pacientes o servidor usa o id da sessão
    patient_id: Optional[Integer] = None


class Appointment(InsertAppointment):
    id: int
    status: AppointmentStatus = "pending"
    created_at: Optional[datetime.datetime] = None


class AppointmentWithDoctor(Appointment):
    doctor: Doctor


class AppointmentDetail(AppointmentWithDoctor):
    patient: User


class StatusUpdate(Schema):
    status: AppointmentStatus


# ----- Reports -----

class InsertReport(Schema):
    patient_id: Integer
    title: str
    file_url: str
    type: ReportType


class Report(InsertReport):
    id: int
    date: Optional[datetime.datetime] = None
