from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .api.errors import register_error_handlers
from .api.routes import register as register_root
from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_ALLOWED_PHOTO_EXTENSIONS, DEFAULT_TOKEN_DAYS
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _load_settings(settings: Any) -> Any:
    if settings is not None:
        return settings
    settings_module = get_settings_module()
    logger.info("Loading settings from %s", settings_module)
    return importlib.import_module(settings_module)


def create_app(settings: Any = None, *, container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    ``settings`` is any object exposing the names defined in ``config.config``;
    by default the module picked by ``APP_ENV`` is used. Passing ``container``
    skips MySQL entirely (tests inject in-memory repositories this way).
    """

    load_dotenv(override=False)
    settings = _load_settings(settings)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = getattr(settings, "MAX_CONTENT_LENGTH", None)
    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "DB target %s@%s:%s/%s",
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            upload_folder=getattr(settings, "UPLOAD_FOLDER", REPO_ROOT / "uploads"),
            token_days=int(getattr(settings, "TOKEN_TTL_DAYS", DEFAULT_TOKEN_DAYS)),
            allowed_photo_extensions=getattr(settings, "ALLOWED_PHOTO_EXTENSIONS", DEFAULT_ALLOWED_PHOTO_EXTENSIONS),
        )

    if bool(getattr(settings, "SEED_DEFAULT_ADMIN", True)):
        container.user_service.ensure_default_admin(
            email=getattr(settings, "DEFAULT_ADMIN_EMAIL", "admin@example.com"),
            password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", "adminpass"),
        )

    app.extensions["attendance_portal"] = container

    register_error_handlers(app)
    register_root(app, container)
    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app


def main() -> None:
    load_dotenv(override=False)
    settings = _load_settings(None)
    app = create_app(settings)
    app.run(host=getattr(settings, "HOST", "0.0.0.0"), port=int(getattr(settings, "PORT", 4000)))


if __name__ == "__main__":
    main()
