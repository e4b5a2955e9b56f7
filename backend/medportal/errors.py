import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Erro de domínio convertido em resposta JSON {"message": ...}."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {"message": self.message}


class Unauthorized(ApiError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(ApiError):
    # Papel errado também responde 401, como as rotas de admin exigem
    status_code = 401
    message = "Admin access required"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"

    def to_dict(self):
        # 404 responde com corpo vazio; a mensagem fica só no log
        return None


class Conflict(ApiError):
    status_code = 409
    message = "Already exists"


class ValidationFailed(ApiError):
    status_code = 400
    message = "Invalid input"

    def __init__(self, errors, message=None):
        self.errors = errors
        super().__init__(message or (errors[0]["message"] if errors else None))

    def to_dict(self):
        body = {"message": self.message, "errors": self.errors}
        if self.errors:
            body["field"] = self.errors[0]["field"]
        return body


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        body = error.to_dict()
        if body is None:
            logger.info("%s: %s", error.status_code, error.message)
            return "", error.status_code
        return jsonify(body), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return jsonify({"message": "Internal server error"}), 500
