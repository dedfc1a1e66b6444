import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "1")))
SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE", "")
SUMMARY_CRON_DAY_OF_WEEK = os.getenv("SUMMARY_CRON_DAY_OF_WEEK", "mon")
SUMMARY_CRON_HOUR = int(os.getenv("SUMMARY_CRON_HOUR", "10"))
SUMMARY_CRON_MINUTE = int(os.getenv("SUMMARY_CRON_MINUTE", "0"))
RESET_DELAY_SECONDS = int(os.getenv("RESET_DELAY_SECONDS", "120"))
