import os

_ENVIRONMENTS = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module() -> str:
    """Settings module named by APP_ENV; unknown values fall back to development."""
    return _ENVIRONMENTS.get(os.getenv("APP_ENV", "development").strip().lower(), "config.development")
