import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///medportal.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "10 per minute")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Insere os três médicos padrão quando a tabela está vazia no boot
    SEED_DOCTORS = True
    ALLOW_ADMIN_REGISTRATION = False

class DevConfig(Config):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    ALLOW_ADMIN_REGISTRATION = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

class ProdConfig(Config):
    DEBUG = False
    SESSION_COOKIE_SECURE = True

class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    RATELIMIT_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4
    ALLOW_ADMIN_REGISTRATION = True
