import os

BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


class Config:
    # SECURITY: set a secure random key in production via env var
    SECRET_KEY = os.environ.get("LOCALLIBRARY_SECRET") or "change-this-secret-in-production"
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or "sqlite:///" + os.path.join(BASE_DIR, "locallibrary.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    ENV_NAME = os.environ.get("LOCALLIBRARY_ENV", "development")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Secure cookies are only sent over https, so leave this off for local http
    FORCE_HTTPS = _env_flag("FORCE_HTTPS")

    # Security headers (Talisman); the templates pull Bootstrap from jsdelivr
    CONTENT_SECURITY_POLICY = {
        "default-src": ["'self'"],
        "script-src": ["'self'", "https://cdn.jsdelivr.net", "https://code.jquery.com"],
        "style-src": ["'self'", "https://cdn.jsdelivr.net", "'unsafe-inline'"],
        "img-src": ["'self'", "data:"],
    }


class ProductionConfig(Config):
    ENV_NAME = "production"
    FORCE_HTTPS = _env_flag("FORCE_HTTPS", "true")


class TestConfig(Config):
    TESTING = True
    ENV_NAME = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    FORCE_HTTPS = False
    LOG_LEVEL = "WARNING"
