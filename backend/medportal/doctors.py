import logging

from flask import Blueprint, request

from .auth import ApiView, login_required
from .errors import NotFound
from .schemas import InsertDoctor
from .validation import parse

logger = logging.getLogger(__name__)


class DoctorList(ApiView):
    def get(self):
        return [d.to_json() for d in self.storage.get_doctors()], 200

    @login_required("admin")
    def post(self, user):
        data = parse(InsertDoctor, request.get_json(silent=True))
        doctor = self.storage.create_doctor(data)
        logger.info("Admin %s created doctor %s", user.id, doctor.id)
        return doctor.to_json(), 201


class DoctorDetail(ApiView):
    def get(self, id):
        doctor = self.storage.get_doctor(id)
        if doctor is None:
            raise NotFound("Doctor not found")
        return doctor.to_json(), 200


def create_doctors_blueprint(storage, sessions):
    bp = Blueprint("doctors", __name__)
    views = {"storage": storage, "sessions": sessions}
    bp.add_url_rule("/doctors", view_func=DoctorList.as_view("doctor_list", **views))
    bp.add_url_rule("/doctors/<int:id>", view_func=DoctorDetail.as_view("doctor_detail", **views))
    return bp
