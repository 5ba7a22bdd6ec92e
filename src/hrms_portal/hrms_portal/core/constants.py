"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

REFRESH_INTERVAL_SECONDS = 30

DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_API_TIMEOUT_SECONDS = 10
DEFAULT_HISTORY_LIMIT = 30

MIN_PASSWORD_LENGTH = 6

# Excel serial 25569 == 1970-01-01; serial 0 == 1899-12-30.
EXCEL_UNIX_EPOCH_SERIAL = 25569
MIN_IMPORT_YEAR = 1900
MAX_IMPORT_YEAR = 2100

EMPTY_TIME = "--:--"
EMPTY_DATE = "--"
EMPTY_DURATION = "--h --m"
