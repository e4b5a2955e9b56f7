import logging

from flask import Blueprint, request

from .auth import ApiView, login_required
from .errors import NotFound
from .schemas import AppointmentRequest, InsertAppointment, StatusUpdate
from .validation import parse

logger = logging.getLogger(__name__)


class AppointmentList(ApiView):
    @login_required()
    def get(self, user):
        """
        Admin vê todos os agendamentos (com médico e paciente);
        o paciente vê apenas os próprios (com médico).
        """
        if user.role == "admin":
            appointments = self.storage.get_appointments()
        else:
            appointments = self.storage.get_appointments_by_patient(user.id)
        return [a.to_json() for a in appointments], 200

    @login_required()
    def post(self, user):
        """
        Cria um agendamento pendente. Só o admin pode marcar em nome de outro
        paciente; para os demais o patientId é sempre o da sessão.
        """
        data = parse(AppointmentRequest, request.get_json(silent=True))
        patient_id = user.id
        if user.role == "admin" and data.patient_id is not None:
            patient_id = data.patient_id

        appointment = self.storage.create_appointment(
            InsertAppointment(
                patient_id=patient_id,
                doctor_id=data.doctor_id,
                date=data.date,
                reason=data.reason,
            )
        )
        logger.info(
            "Appointment %s booked for patient %s with doctor %s",
            appointment.id, patient_id, appointment.doctor_id,
        )
        return appointment.to_json(), 201


class AppointmentStatus(ApiView):
    @login_required("admin")
    def patch(self, user, id):
        data = parse(StatusUpdate, request.get_json(silent=True))
        appointment = self.storage.update_appointment_status(id, data.status)
        if appointment is None:
            raise NotFound("Appointment not found")
        logger.info("Admin %s set appointment %s to %s", user.id, id, data.status)
        return appointment.to_json(), 200


def create_appointments_blueprint(storage, sessions):
    bp = Blueprint("appointments", __name__)
    views = {"storage": storage, "sessions": sessions}
    bp.add_url_rule(
        "/appointments",
        view_func=AppointmentList.as_view("appointment_list", **views),
    )
    bp.add_url_rule(
        "/appointments/<int:id>/status",
        view_func=AppointmentStatus.as_view("appointment_status", **views),
    )
    return bp
