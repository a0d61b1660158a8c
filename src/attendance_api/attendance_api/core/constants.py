"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MS_PER_HOUR = 1000 * 60 * 60
TOTAL_HOURS_DECIMALS = 2

DEFAULT_TOKEN_TTL_MINUTES = 60 * 24
JWT_ALGORITHM = "HS256"

MIN_PASSWORD_LENGTH = 6

# MySQL error number for duplicate key violations.
MYSQL_DUPLICATE_ENTRY = 1062
