"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LATE_GRACE_MINUTES = 10
DEFAULT_SHIFT_START = time(8, 0)
LUNCH_START = time(12, 0)
LUNCH_END = time(13, 0)

NOMINAL_WORKDAY_HOURS = 8
WORKING_DAYS_PER_WEEK = 6
WEEKS_PER_YEAR = 52
RECENT_PERIODS = 8

DEFAULT_DAILY_RATE = Decimal("510.00")
DEFAULT_ANNUAL_SALARY = Decimal("159120.00")
DEFAULT_SSS_DEDUCTION = Decimal("300.00")
DEFAULT_PHILHEALTH_DEDUCTION = Decimal("250.00")
DEFAULT_PAGIBIG_DEDUCTION = Decimal("200.00")
DEFAULT_FLAT_DEDUCTION_TOTAL = Decimal("750.00")
DEFAULT_DEDUCTION_MIN = Decimal("0.00")
DEFAULT_DEDUCTION_MAX = Decimal("10000.00")
