import os
from datetime import timedelta

from dotenv import load_dotenv

# Load .env from project root so local development MONGO_URI is picked up
load_dotenv()


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/?directConnection=true")
    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "todoapp")
    MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", "2000"))

    ENV = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    JSON_SORT_KEYS = False

    # Sessions live for a week; cookies are only marked secure in production.
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE", "1" if ENV == "production" else "0")
    PERMANENT_SESSION_LIFETIME = timedelta(days=int(os.environ.get("SESSION_LIFETIME_DAYS", "7")))


class TestConfig(Config):
    TESTING = True
    DEBUG = False
    SECRET_KEY = "test-secret-key"
    MONGO_DB_NAME = "todoapp_test"
    SESSION_COOKIE_SECURE = False
