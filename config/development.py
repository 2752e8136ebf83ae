import os

from .config import Config, _flag

SECRET_KEY = Config.SECRET_KEY or "dev-secret-key"

DB_CONFIG = Config.db_config()

DEBUG = True
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()
LOG_JSON = Config.LOG_JSON

# Applies database/schema.sql on startup (CREATE IF NOT EXISTS only)
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "1")

PAYROLL = dict(Config.PAYROLL)
