# letter_wizard/schemas/limits.py
"""
UAE labor/commercial-law figures used as validation bounds.

Opaque configured constants: the engine never derives them.
"""

# Maximum cash payment (AED) permitted for a single transaction
CASH_PAYMENT_CEILING = 55_000

MIN_BASIC_SALARY = 1_000
MAX_BASIC_SALARY = 1_000_000
MAX_MONETARY_AMOUNT = 999_999_999.99

# Typical notice period band (days); outside it is advisory only
NOTICE_PERIOD_TYPICAL_MIN = 30
NOTICE_PERIOD_TYPICAL_MAX = 90

MAX_PROBATION_MONTHS = 6
MIN_ANNUAL_LEAVE_DAYS = 30
STANDARD_DAILY_HOURS = 8
MAX_DAILY_HOURS = 12
DAYS_PER_WEEK = 7
MAX_LIMITED_CONTRACT_MONTHS = 36
MIN_WORKING_AGE_DAYS = 15 * 365

# Lease termination: minimum gap between notice and termination (days)
MIN_LEASE_TERMINATION_NOTICE_DAYS = 30
RENEWAL_CHANGE_NOTICE_DAYS = 90
LOW_ANNUAL_RENT = 10_000
MAX_RENT_INCREASE_PERCENT = 20

# How far in the past a contract or lease may start (months)
MAX_START_DATE_AGE_MONTHS = 6

REQUIRED_WITNESSES = 2
MAX_FIELD_LENGTH = 5_000

YES_NO = ("Yes", "No")

EMIRATES = (
    "Abu Dhabi",
    "Dubai",
    "Sharjah",
    "Ajman",
    "Umm Al Quwain",
    "Ras Al Khaimah",
    "Fujairah",
)

CURRENCIES = ("AED", "USD", "EUR", "GBP")
