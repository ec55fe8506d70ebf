"""Settings shared by every environment module."""

import os


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "toil_db"),
    }


def toil_policy_from_env() -> dict:
    return {
        "standard_hours": os.getenv("TOIL_STANDARD_HOURS", "8"),
        "expiry_days": int(os.getenv("TOIL_EXPIRY_DAYS", "21")),
        "warning_horizon_days": int(os.getenv("TOIL_WARNING_HORIZON_DAYS", "7")),
        # Python weekday numbers, Monday=0
        "weekend_days": os.getenv("TOIL_WEEKEND_DAYS", "5,6"),
        "require_weekend_approval": bool(int(os.getenv("TOIL_REQUIRE_WEEKEND_APPROVAL", "0"))),
        "lock_timeout_seconds": int(os.getenv("TOIL_LOCK_TIMEOUT_SECONDS", "10")),
    }
