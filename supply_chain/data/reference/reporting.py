"""
Reporting Configuration

Constants shared by the report computations.
"""

# Number of rows kept by the "top" reports
TOP_N = 5

# Decimal places for currency, weight sums and percentages
DECIMALS = 2

# Weight limit classification (weight_limit_violations)
STATUS_EXCEEDED = "EXCEEDED"
STATUS_WITHIN_LIMIT = "WITHIN LIMIT"

# Warehouse utilization classification (warehouse_utilization)
STATUS_OVER_CAPACITY = "Over Capacity"
STATUS_UNDER_CAPACITY = "Under Capacity"

# Late day count meaning "shipped on time"
ON_TIME_LATE_DAYS = 0
