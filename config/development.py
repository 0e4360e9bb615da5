import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "synthetic" generates demo attendance locally, "remote" reads/writes the upstream API
DATA_SOURCE = os.getenv("DATA_SOURCE", "synthetic")
API_BASE_URL = os.getenv("API_BASE_URL", "")

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "20"))
FETCH_WORKERS = int(os.getenv("FETCH_WORKERS", "8"))

# date.weekday() numbering: 0 = Monday ... 6 = Sunday
WEEK_STARTS_ON = int(os.getenv("WEEK_STARTS_ON", "0"))
DEFAULT_VIEW_MODE = os.getenv("DEFAULT_VIEW_MODE", "week")

DEBUG = True
