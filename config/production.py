import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "ponto"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ponto_db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")
PUNCH_SCHEMA = os.getenv("PUNCH_SCHEMA", "four_state")
LUNCH_POLICY = os.getenv("LUNCH_POLICY", "exclude")

ALLOW_FUTURE_PUNCH = False
REQUIRE_LOCATION = bool(int(os.getenv("REQUIRE_LOCATION", "0")))
GEOLOCATION_TIMEOUT_SECONDS = int(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
