"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

STANDARD_WORK_HOURS = Decimal("8")
WORKING_DAYS_PER_MONTH = 22
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")
STAFF_FALLBACK_HOURLY_RATE = Decimal("500")

# Leave
MAX_LEAVES_PER_MONTH = 2
DEFAULT_MONTHLY_LEAVE_CREDIT = 1

# Salary structure derived from CTC when none is stored
BASIC_PERCENTAGE = Decimal("40")
HRA_PERCENTAGE = Decimal("20")
CONVEYANCE_ALLOWANCE = Decimal("1600")
MEDICAL_ALLOWANCE = Decimal("1250")

# Statutory
PF_RATE = Decimal("0.12")
PF_WAGE_CEILING = Decimal("15000")
ESI_RATE = Decimal("0.0075")
ESI_GROSS_CEILING = Decimal("21000")
DEFAULT_PT_STATE = "maharashtra"

# GST (percent)
DEFAULT_CGST_RATE = Decimal("9")
DEFAULT_SGST_RATE = Decimal("9")
DEFAULT_IGST_RATE = Decimal("18")

AUTO_OVERTIME_REASON = "Auto-generated from attendance record"
