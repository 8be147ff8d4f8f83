import os


def payroll_settings() -> dict:
    """Payroll policy knobs shared by every environment, overridable from the environment."""
    return {
        "LATE_GRACE_MINUTES": int(os.getenv("LATE_GRACE_MINUTES", "10")),
        "SHIFT_START": os.getenv("SHIFT_START", "08:00"),
        # per_employee | flat
        "DEDUCTION_POLICY": os.getenv("DEDUCTION_POLICY", "per_employee"),
        "FLAT_DEDUCTION_TOTAL": os.getenv("FLAT_DEDUCTION_TOTAL", "750.00"),
        # daily | annual
        "RATE_BASIS": os.getenv("RATE_BASIS", "daily"),
        "DEDUCTION_MIN": os.getenv("DEDUCTION_MIN", "0"),
        "DEDUCTION_MAX": os.getenv("DEDUCTION_MAX", "10000"),
        "DEFAULT_PERIOD_TYPE": os.getenv("DEFAULT_PERIOD_TYPE", "weekly"),
    }


def db_settings(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "payroll_db"),
    }
