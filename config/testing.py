from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = {**Config.db_config(), "database": "institution_payroll_test"}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_JSON = False

AUTO_INIT_DB = False

PAYROLL = dict(Config.PAYROLL)
