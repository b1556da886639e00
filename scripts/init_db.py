"""Create the portal database if needed and apply database/schema.sql.

Usage: APP_ENV=development python scripts/init_db.py
Exits non-zero when a portal table is still missing afterwards.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_portal.attendance_portal.common.logging_utils import configure_logging
from src.attendance_portal.attendance_portal.database.bootstrap import apply_schema, list_tables

SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"
PORTAL_TABLES = ("users", "students", "attendance")


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)

    present = set(list_tables(db_config))
    missing = [name for name in PORTAL_TABLES if name not in present]
    if missing:
        print(f"Schema incomplete in {db_config.get('database')}: missing {', '.join(missing)}", file=sys.stderr)
        return 1

    print(f"Schema ready in {db_config.get('database')} on {db_config.get('host')}: {', '.join(PORTAL_TABLES)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
