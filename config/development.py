import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# HRMS backend the portal talks to
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

# Time tracker: background re-sync of today's status
REFRESH_INTERVAL_SECONDS = float(os.getenv("REFRESH_INTERVAL_SECONDS", "30"))
BACKGROUND_REFRESH = bool(int(os.getenv("BACKGROUND_REFRESH", "1")))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "30"))

NOTIFICATIONS_ENABLED = bool(int(os.getenv("NOTIFICATIONS_ENABLED", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
