import logging

from flask import Blueprint, request

from .auth import ApiView, login_required
from .schemas import InsertReport
from .validation import parse

logger = logging.getLogger(__name__)


class ReportList(ApiView):
    @login_required()
    def get(self, user):
        # Mesmo o admin só lista os próprios laudos
        return [r.to_json() for r in self.storage.get_reports_by_patient(user.id)], 200

    @login_required("admin")
    def post(self, user):
        """
        Registra um laudo para o paciente informado em patientId.
        O fileUrl vem do serviço externo de upload.
        """
        data = parse(InsertReport, request.get_json(silent=True))
        report = self.storage.create_report(data)
        logger.info("Admin %s filed %s %s for patient %s", user.id, report.type, report.id, report.patient_id)
        return report.to_json(), 201


def create_reports_blueprint(storage, sessions):
    bp = Blueprint("reports", __name__)
    bp.add_url_rule(
        "/reports",
        view_func=ReportList.as_view("report_list", storage=storage, sessions=sessions),
    )
    return bp
