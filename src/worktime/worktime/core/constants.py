"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_RESET_DELAY_SECONDS = 120
DEFAULT_SUMMARY_DAY_OF_WEEK = "mon"
DEFAULT_SUMMARY_HOUR = 10
DEFAULT_SUMMARY_MINUTE = 0
SUMMARY_WINDOW_DAYS = 7

SESSION_NOTICE_COLOR = 0x00AE86
SUMMARY_NOTICE_COLOR = 0x0099FF

DURATION_DECIMALS = 2
