from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_portal.attendance_portal.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        jwt_secret=settings.JWT_SECRET,
        upload_folder=settings.UPLOAD_FOLDER,
    )

    created = container.user_service.ensure_default_admin(
        email=settings.DEFAULT_ADMIN_EMAIL,
        password=settings.DEFAULT_ADMIN_PASSWORD,
    )
    if created:
        print(f"OK: Created admin {settings.DEFAULT_ADMIN_EMAIL} (id={created})")
    else:
        print("OK: An admin account already exists; nothing to do")


if __name__ == "__main__":
    main()
