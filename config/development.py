import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ponto_db"),
}

DEBUG = True

# If enabled, app will apply database/schema.sql on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create the demo user on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")

# four_state (entrada/almoço/retorno/saída) or two_state (entrada/saída)
PUNCH_SCHEMA = os.getenv("PUNCH_SCHEMA", "four_state")
# exclude: lunch break is not worked time; include: lunch punches are ignored
LUNCH_POLICY = os.getenv("LUNCH_POLICY", "exclude")

ALLOW_FUTURE_PUNCH = bool(int(os.getenv("ALLOW_FUTURE_PUNCH", "0")))
REQUIRE_LOCATION = bool(int(os.getenv("REQUIRE_LOCATION", "0")))
GEOLOCATION_TIMEOUT_SECONDS = int(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
