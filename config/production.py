import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_SOURCE = os.getenv("DATA_SOURCE", "remote")
API_BASE_URL = os.getenv("API_BASE_URL", "")

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "20"))
FETCH_WORKERS = int(os.getenv("FETCH_WORKERS", "8"))

WEEK_STARTS_ON = int(os.getenv("WEEK_STARTS_ON", "0"))
DEFAULT_VIEW_MODE = os.getenv("DEFAULT_VIEW_MODE", "week")

DEBUG = False
