"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_TIMEZONE = "America/Sao_Paulo"
MIN_PASSWORD_LENGTH = 6

UNSET_TIME = "--:--"
ZERO_DURATION = "0h 00m"

GEOLOCATION_MIN_TIMEOUT_SECONDS = 5
GEOLOCATION_MAX_TIMEOUT_SECONDS = 10

EXPORT_HEADER = ("Data", "Hora", "Tipo", "Funcionário")
BR_DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M:%S"
FUTURE_TOLERANCE_SECONDS = 60
MAX_NOTE_LENGTH = 500
