SECRET_KEY = "test-secret"

API_BASE_URL = "http://hrms.test"
API_TIMEOUT_SECONDS = 1

REFRESH_INTERVAL_SECONDS = 30
# No background threads under pytest
BACKGROUND_REFRESH = False
HISTORY_LIMIT = 30

NOTIFICATIONS_ENABLED = False

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
