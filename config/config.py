import os


def _flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "")

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "institution_payroll")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_JSON = _flag("LOG_JSON")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB")

    # Deployment defaults; a stored company_payroll_config row overrides them.
    PAYROLL = {
        "basic_percentage": os.environ.get("PAYROLL_BASIC_PERCENTAGE", "40"),
        "hra_percentage": os.environ.get("PAYROLL_HRA_PERCENTAGE", "20"),
        "conveyance_allowance": os.environ.get("PAYROLL_CONVEYANCE_ALLOWANCE", "1600"),
        "medical_allowance": os.environ.get("PAYROLL_MEDICAL_ALLOWANCE", "1250"),
        "default_overtime_multiplier": os.environ.get("PAYROLL_OVERTIME_MULTIPLIER", "1.5"),
        "standard_work_hours": os.environ.get("PAYROLL_STANDARD_WORK_HOURS", "8"),
        "working_days_per_month": os.environ.get("PAYROLL_WORKING_DAYS_PER_MONTH", "22"),
        "staff_fallback_hourly_rate": os.environ.get("PAYROLL_STAFF_HOURLY_RATE", "500"),
        "max_leaves_per_month": os.environ.get("MAX_LEAVES_PER_MONTH", "2"),
        "cgst_rate": os.environ.get("GST_CGST_RATE", "9"),
        "sgst_rate": os.environ.get("GST_SGST_RATE", "9"),
        "igst_rate": os.environ.get("GST_IGST_RATE", "18"),
    }

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
