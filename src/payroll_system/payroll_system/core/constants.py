"""Named payroll rules and defaults.

Note: Keep the business constants here so calculations never carry bare numbers.
"""

from datetime import time
from decimal import Decimal

PAYROLL_MONTH_DAYS = 30
NOMINAL_WORKDAY_HOURS = 9
STANDARD_SHIFT_HOURS = 8

BASE_MEAL_ALLOWANCE = Decimal("500")
MEAL_FORFEIT_PER_ABSENCE = Decimal("50")
LEAVE_COMPENSATION_MULTIPLIER = Decimal("2")

DEFAULT_MONTHLY_LATE_ALLOWANCE = 120
DEFAULT_ANNUAL_LEAVE_BALANCE = 21
DEFAULT_MEDICAL_LEAVE_DEDUCTION = Decimal("0.25")
DEFAULT_LATE_MINUTES_PER_DAY = 480

SHIFT_START = time(8, 30)
LATE_GRACE_MINUTES = 45
LATE_HALF_DAY_FROM = time(11, 0)
LATE_QUARTER_DEDUCTION = Decimal("0.25")
LATE_HALF_DEDUCTION = Decimal("0.5")

EARLY_LEAVE_HALF_UNTIL = time(16, 0)
EARLY_LEAVE_QUARTER_UNTIL = time(17, 15)
EARLY_LEAVE_HALF_DEDUCTION = Decimal("0.5")
EARLY_LEAVE_QUARTER_DEDUCTION = Decimal("0.25")

MAX_SHIFT_HOURS = 24
MIN_PASSWORD_LENGTH = 6
