"""
LocalLibrary: a book catalog web app (Flask + SQLite).

- HTML pages for Books, Authors, Genres and Book instances (copies)
- Create / update / delete through validated forms (WTForms, CSRF via Flask-WTF)
- Records that others still reference can't be deleted
- Security headers via Flask-Talisman

Run:
  flask --app locallibrary init-db --sample
  flask --app locallibrary run
"""

import logging
import os

from flask import Flask, render_template, request
from flask_talisman import Talisman
from flask_wtf import CSRFProtect
from werkzeug.exceptions import HTTPException

from .cli import register_commands
from .config import Config, ProductionConfig
from .models import db
from .store import CatalogStore
from .views import register_routes

logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def configure_logging(app):
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("locallibrary").setLevel(app.config["LOG_LEVEL"])


def register_error_handlers(app):
    def render_error(status, message, error):
        # Only show error details while developing
        details = error if app.config["ENV_NAME"] == "development" else None
        return render_template("error.html", title="Error", status=status, message=message, error=details), status

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return render_error(error.code, error.description, error)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        status = getattr(error, "status", None) or getattr(error, "code", None)
        if not isinstance(status, int):
            status = 500
        return render_error(status, str(error) or "Internal Server Error", error)


def create_app(config=None):
    """Application factory: pass a config class/object, defaults to ``Config``
    (``ProductionConfig`` when ``LOCALLIBRARY_ENV=production``)."""
    app = Flask(__name__)
    if config is None:
        config = ProductionConfig if os.environ.get("LOCALLIBRARY_ENV") == "production" else Config
    app.config.from_object(config)

    configure_logging(app)

    Talisman(
        app,
        content_security_policy=app.config["CONTENT_SECURITY_POLICY"],
        force_https=app.config["FORCE_HTTPS"],
        session_cookie_secure=app.config["FORCE_HTTPS"],
    )
    db.init_app(app)
    csrf.init_app(app)
    app.extensions["catalog_store"] = CatalogStore(db)

    register_routes(app)
    register_error_handlers(app)
    register_commands(app)

    @app.after_request
    def log_request(response):
        logger.info(f"{request.method} {request.full_path.rstrip('?')} {response.status_code}")
        return response

    with app.app_context():
        db.create_all()

    return app
