"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

import calendar

# Sunday is a fixed rest day: never counted as an absence.
REST_WEEKDAYS = frozenset({calendar.SUNDAY})

WEEKLY_PERIOD_DAYS = 7
BIWEEKLY_PERIOD_DAYS = 14

DEFAULT_GENERATED_BY = "admin"
PAYROLL_CONFIRMED_ACTION = "payroll_generated"
EMPLOYEE_DEACTIVATED_ACTION = "employee_deactivated"
