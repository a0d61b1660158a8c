"""Smoke test: can we reach the configured MySQL database?

Exits 0 on success and 1 on failure so it can gate container start-up.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_api.attendance_api.database.connection import DBConfig, DatabaseConnection


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    if conn.ping():
        print(f"OK: connected to {conn.config.describe()}")
        return 0

    print(f"FAIL: cannot reach {conn.config.describe()}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
