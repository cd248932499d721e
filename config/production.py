import os

PERIOD_TYPE = os.getenv("PERIOD_TYPE", "weekly")
REFERENCE_DATE = os.getenv("REFERENCE_DATE", "")
BASE_RATE_CENTS = os.getenv("BASE_RATE_CENTS", "")
RATE_VALID_UPPER_BOUND = float(os.getenv("RATE_VALID_UPPER_BOUND", "10.0"))
WEEK_START = int(os.getenv("WEEK_START", "0"))
TIMEZONE = os.getenv("TIMEZONE", "")
WEEKLY_TARGET_HOURS = float(os.getenv("WEEKLY_TARGET_HOURS", "40.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
