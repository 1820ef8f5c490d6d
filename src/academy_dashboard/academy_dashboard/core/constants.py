"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BILLING_WEEKS_PER_MONTH = 4
DEFAULT_SESSIONS_PER_WEEK = 1
MONTH_FORMAT = "%Y-%m"
UNKNOWN_LABEL = "Unknown"
