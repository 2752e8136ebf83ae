"""Create the configured database and apply database/schema.sql.

Usage: APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config import get_settings_module  # noqa: E402

from src.institution_payroll.institution_payroll.core.logging_config import configure_logging, get_logger  # noqa: E402
from src.institution_payroll.institution_payroll.database.bootstrap import apply_schema, list_tables  # noqa: E402
from src.institution_payroll.institution_payroll.database.connection import DBConfig  # noqa: E402

logger = get_logger("scripts.init_db")


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=bool(getattr(settings, "LOG_JSON", False)))

    applied = apply_schema(settings.DB_CONFIG, schema_path=ROOT / "database" / "schema.sql")
    tables = list_tables(settings.DB_CONFIG)
    logger.info(
        "%s ready: %d statements, tables: %s",
        DBConfig.from_dict(settings.DB_CONFIG).describe(),
        applied,
        ", ".join(tables),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
