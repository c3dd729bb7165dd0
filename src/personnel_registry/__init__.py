"""Personnel Registry package.

Personnel register with a service number and password, log in, complete a
profile and upload a profile photo. Organized by feature modules (users,
photos) with a thin Flask controller layer over service/repository layers.
"""
from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Any, Mapping, Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask, request
from werkzeug.exceptions import RequestEntityTooLarge

from config import get_settings_module

from .common.web import error_response
from .container import Container, build_container
from .core.constants import (
    DEFAULT_MAX_PHOTO_BYTES,
    DEFAULT_PASSWORD_HASH_METHOD,
    DEFAULT_SESSION_DAYS,
    UPLOAD_ENVELOPE_BYTES,
)
from .core.exceptions import DomainError, StoreError, StoreUnavailableError, UploadRejectedError
from .database.bootstrap import apply_schema
from .photos.controller import register as register_photos
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "database" / "schema.sql"


def _load_settings(overrides: Optional[Mapping[str, Any]]) -> dict:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in dir(module) if name.isupper()}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(e.code, str(e), e.http_status)

    @app.errorhandler(StoreError)
    def handle_store_error(e: StoreError):
        logger.exception("store failure")
        if app.config.get("DEBUG"):
            return error_response(e.code, f"Store error: {e}", e.http_status)
        return error_response(e.code, "An error occurred while talking to the store.", e.http_status)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(_e: RequestEntityTooLarge):
        if request.endpoint != "upload_photo":
            return error_response("PAYLOAD_TOO_LARGE", "Request body is too large.", 413)
        limit_mb = app.config["MAX_PHOTO_BYTES"] / (1024 * 1024)
        rejected = UploadRejectedError(f"File is too large (Limit: {limit_mb:g}MB).", too_large=True)
        return error_response(rejected.code, str(rejected), rejected.http_status)


def create_app(
    settings_overrides: Optional[Mapping[str, Any]] = None,
    container: Optional[Container] = None,
) -> Flask:
    """Build the Flask app.

    Without an injected ``container`` this connects to MySQL and raises
    StoreUnavailableError if it cannot; the caller is expected to exit.
    """
    load_dotenv(override=False)
    settings = _load_settings(settings_overrides)

    debug = bool(settings.get("DEBUG", False))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    max_photo_bytes = int(settings.get("MAX_PHOTO_BYTES", DEFAULT_MAX_PHOTO_BYTES))
    app.config["MAX_PHOTO_BYTES"] = max_photo_bytes
    app.config["MAX_CONTENT_LENGTH"] = max_photo_bytes + UPLOAD_ENVELOPE_BYTES
    app.permanent_session_lifetime = timedelta(days=int(settings.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        db_config = settings["DB_CONFIG"]
        logger.info("settings=%s", settings["SETTINGS_MODULE"])
        if settings.get("AUTO_INIT_DB"):
            try:
                apply_schema(db_config, schema_path=SCHEMA_PATH)
            except mysql.connector.Error as e:
                raise StoreUnavailableError(f"Store unavailable: {e}") from e
            logger.info("schema ready")
        container = build_container(
            db_config=db_config,
            upload_folder=settings.get("UPLOAD_FOLDER", "uploads"),
            max_photo_bytes=max_photo_bytes,
            password_hash_method=settings.get("PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD),
        )

    _register_error_handlers(app)
    register_users(app, container)
    register_photos(app, container)

    return app
