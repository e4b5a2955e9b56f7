import logging
from functools import wraps

from flask import Blueprint, current_app, request
from flask.views import MethodView
from flask_login import LoginManager, UserMixin, current_user, login_user, logout_user

from . import bcrypt, limiter
from .errors import Forbidden, Unauthorized
from .schemas import InsertUser, LoginRequest
from .validation import parse

logger = logging.getLogger(__name__)


def authorize(user, role=None):
    """Predicado único de autorização: exige sessão e, se pedido, o papel."""
    if user is None:
        raise Unauthorized("Not authenticated")
    if role is not None and user.role != role:
        logger.info("User %s (%s) rejected for %s-only route", user.id, user.role, role)
        raise Forbidden()
    return user


class SessionUser(UserMixin):
    """Adaptador do registro User para o Flask-Login."""

    def __init__(self, record):
        self.record = record
        self.id = record.id


class SessionVerifier:
    """Sessão por cookie (Flask-Login) com o usuário carregado pelo gateway."""

    def __init__(self, storage):
        self.storage = storage
        self.login_manager = LoginManager()
        self.login_manager.user_loader(self.load_user)

    def init_app(self, app):
        self.login_manager.init_app(app)

    def load_user(self, user_id):
        record = self.storage.get_user(int(user_id))
        return SessionUser(record) if record else None

    def current_user(self):
        if current_user.is_authenticated:
            return current_user.record
        return None

    def authorize(self, role=None):
        return authorize(self.current_user(), role)

    def start(self, user):
        login_user(SessionUser(user))

    def end(self):
        logout_user()


def login_required(role=None):
    """Decorator para métodos de views protegidas; passa o usuário atual à view."""
    def decorator(f):
        @wraps(f)
        def wrapper(self, *args, **kwargs):
            user = self.sessions.authorize(role)
            return f(self, user, *args, **kwargs)
        return wrapper
    return decorator


class ApiView(MethodView):
    """Base das views: recebe o gateway e o verificador de sessão por injeção."""

    def __init__(self, storage, sessions):
        self.storage = storage
        self.sessions = sessions


def _rate_limit():
    return current_app.config.get("LOGIN_RATE_LIMIT", "10 per minute")


class Register(ApiView):
    decorators = [limiter.limit(_rate_limit)]

    def post(self):
        data = parse(InsertUser, request.get_json(silent=True))
        if data.role != "patient" and not current_app.config.get("ALLOW_ADMIN_REGISTRATION"):
            data = data.model_copy(update={"role": "patient"})

        hashed_pw = bcrypt.generate_password_hash(data.password).decode("utf-8")
        user = self.storage.create_user(data.model_copy(update={"password": hashed_pw}))
        self.sessions.start(user)
        logger.info("Registered user %s (%s)", user.username, user.role)
        return user.to_json(), 201


class Login(ApiView):
    decorators = [limiter.limit(_rate_limit)]

    def post(self):
        data = parse(LoginRequest, request.get_json(silent=True))
        user = self.storage.get_user_by_username(data.username)
        if not user or not bcrypt.check_password_hash(user.password, data.password):
            logger.info("Failed login for %s", data.username)
            raise Unauthorized("Invalid username or password")

        self.sessions.start(user)
        logger.info("User %s logged in", user.username)
        return user.to_json(), 200


class Logout(ApiView):
    def post(self):
        self.sessions.end()
        return {"message": "Logged out"}, 200


class CurrentUser(ApiView):
    @login_required()
    def get(self, user):
        return user.to_json(), 200


def create_auth_blueprint(storage, sessions):
    bp = Blueprint("auth", __name__)
    views = {"storage": storage, "sessions": sessions}
    bp.add_url_rule("/register", view_func=Register.as_view("register", **views))
    bp.add_url_rule("/login", view_func=Login.as_view("login", **views))
    bp.add_url_rule("/logout", view_func=Logout.as_view("logout", **views))
    bp.add_url_rule("/user", view_func=CurrentUser.as_view("user", **views))
    return bp
