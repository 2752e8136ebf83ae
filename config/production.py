import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY
if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY must be set in production")

DB_CONFIG = Config.db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
LOG_JSON = bool(int(os.environ.get("LOG_JSON", "1")))

AUTO_INIT_DB = Config.AUTO_INIT_DB

PAYROLL = dict(Config.PAYROLL)
