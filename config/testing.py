SECRET_KEY = "test-secret"

DATA_SOURCE = "synthetic"
API_BASE_URL = "http://upstream.test"

HTTP_TIMEOUT = 5
FETCH_WORKERS = 4

WEEK_STARTS_ON = 0
DEFAULT_VIEW_MODE = "week"

DEBUG = False
TESTING = True
