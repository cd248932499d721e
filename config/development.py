import os

# weekly | biweekly | monthly
PERIOD_TYPE = os.getenv("PERIOD_TYPE", "weekly")

# Anchor of biweekly periods (YYYY-MM-DD); unset uses 2001-01-01
REFERENCE_DATE = os.getenv("REFERENCE_DATE", "")

# Hourly base rate in cents; unset means no pay estimates
BASE_RATE_CENTS = os.getenv("BASE_RATE_CENTS", "")

RATE_VALID_UPPER_BOUND = float(os.getenv("RATE_VALID_UPPER_BOUND", "10.0"))

# 0 = Monday ... 6 = Sunday
WEEK_START = int(os.getenv("WEEK_START", "0"))

# IANA zone name for day boundaries; unset reads instants as wall clock
TIMEZONE = os.getenv("TIMEZONE", "")

# Weekly hours target used by forecasts; scaled to the pay period length
WEEKLY_TARGET_HOURS = float(os.getenv("WEEKLY_TARGET_HOURS", "40.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
