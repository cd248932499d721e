PERIOD_TYPE = "weekly"
REFERENCE_DATE = ""
BASE_RATE_CENTS = "1500"
RATE_VALID_UPPER_BOUND = 10.0
WEEK_START = 0
TIMEZONE = ""
WEEKLY_TARGET_HOURS = 40.0

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
