"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

DEFAULT_RATE_VALID_UPPER_BOUND = 10.0
RATE_MATCH_TOLERANCE = 1e-9

DEFAULT_WEEK_START = 0  # Monday
BIWEEKLY_EPOCH = date(2001, 1, 1)

MAXIMUM_SHIFT_HOURS = 24

CONSISTENCY_VARIANCE_THRESHOLD = 2.0
CONSISTENCY_STDDEV_CEILING_MINUTES = 120

HIGH_OVERTIME_SHARE = 0.2
HOURS_INCREASE_THRESHOLD = 0.1
HIGH_WEEKLY_HOURS = 50.0

# forecasting
WEEKLY_TARGET_HOURS = 40.0
OVERTIME_WARNING_HOURS = 35.0
OVERTIME_CRITICAL_HOURS = 40.0
APPROACHING_SHARE_OF_WARNING = 0.8
ON_TRACK_SHARE_OF_TARGET = 0.9
HEAVY_SCHEDULE_SHARE_OF_TARGET = 1.25
