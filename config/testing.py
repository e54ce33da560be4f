import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ponto_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

TIMEZONE = "America/Sao_Paulo"
PUNCH_SCHEMA = "four_state"
LUNCH_POLICY = "exclude"

ALLOW_FUTURE_PUNCH = False
REQUIRE_LOCATION = False
GEOLOCATION_TIMEOUT_SECONDS = 10

SESSION_DAYS = 7
