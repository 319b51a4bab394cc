SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": "http://api.test/api",
    "timeout": 5.0,
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
