"""Create the configured database (if missing) and apply database/schema.sql."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_api.attendance_api.database.bootstrap import apply_schema, list_tables
from src.attendance_api.attendance_api.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    print(f"OK: schema ready on {conn.config.describe()}: {', '.join(sorted(tables))}")


if __name__ == "__main__":
    main()
