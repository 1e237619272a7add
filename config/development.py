import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Applies database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
ADMIN_CODE = os.getenv("ADMIN_CODE", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# "recorded": sum per-day late deductions; "minutes": late minutes over the allowance / LATE_MINUTES_PER_DAY
LATE_DEDUCTION_POLICY = os.getenv("LATE_DEDUCTION_POLICY", "recorded")
LATE_MINUTES_PER_DAY = int(os.getenv("LATE_MINUTES_PER_DAY", "480"))
