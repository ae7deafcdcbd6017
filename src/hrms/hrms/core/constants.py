"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

OFFICE_START = time(9, 30)
HALF_DAY_CUTOFF = time(13, 30)
OFFICE_END = time(18, 0)

MIN_LEAVE_DAYS = 0.5

DEFAULT_LEAVE_BALANCE = {
    "el": 30.0,
    "sl": 6.0,
    "cl": 6.0,
    "od": 0.0,
    "lwp": 0.0,
    "lhd": 0.0,
    "others": 0.0,
}

LEAVE_BALANCE_MAX = {
    "el": 75.0,
    "sl": 15.0,
}

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MIN_PASSWORD_LENGTH = 6
