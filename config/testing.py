import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_JSON = False

AUTO_INIT_DB = False

# Tests drive run_once() directly.
SCHEDULER_ENABLED = False
SCHEDULER_TIMEZONE = ""
SUMMARY_CRON_DAY_OF_WEEK = "mon"
SUMMARY_CRON_HOUR = 10
SUMMARY_CRON_MINUTE = 0
RESET_DELAY_SECONDS = 120
