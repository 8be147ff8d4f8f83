import os

from config.config import db_settings, payroll_settings

SECRET_KEY = "test-secret"

DB_CONFIG = db_settings()

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PAYROLL = payroll_settings()
