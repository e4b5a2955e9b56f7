import logging
import os
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from config import DevConfig, ProdConfig

db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
cors = CORS()
limiter = Limiter(key_func=get_remote_address)

def create_app(config_object=None):
    app = Flask(__name__)
    if config_object is None:
        env = os.getenv("FLASK_ENV", "development")
        config_object = ProdConfig if env == "production" else DevConfig
    app.config.from_object(config_object)
    if not app.config.get("SECRET_KEY"):
        # Sem chave os cookies de sessão seriam forjáveis
        raise RuntimeError("SECRET_KEY is not set")
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from . import models  # noqa: F401  registra as tabelas no metadata

    # Inicializa extensões
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )
    limiter.init_app(app)

    from .auth import SessionVerifier, create_auth_blueprint
    from .appointments import create_appointments_blueprint
    from .cli import register_commands
    from .doctors import create_doctors_blueprint
    from .errors import register_error_handlers
    from .reports import create_reports_blueprint
    from .seed import seed_doctors
    from .storage import DatabaseStorage

    # Gateway e sessão criados uma vez e injetados nas rotas
    storage = DatabaseStorage(db)
    sessions = SessionVerifier(storage)
    sessions.init_app(app)
    app.extensions["storage"] = storage

    # Registrar Blueprints
    for factory in (
        create_auth_blueprint,
        create_doctors_blueprint,
        create_appointments_blueprint,
        create_reports_blueprint,
    ):
        app.register_blueprint(factory(storage, sessions), url_prefix="/api")

    register_error_handlers(app)
    register_commands(app, storage)

    with app.app_context():
        db.create_all()
        if app.config.get("SEED_DOCTORS"):
            seed_doctors(storage)

    return app
