from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} inválido")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter no mínimo {min_len} caracteres")
    return value


def require_email(value: str) -> str:
    value = require_non_empty(value, "E-mail").lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError("E-mail inválido")
    return value


def require_matching(value: str, confirmation: str, message: str) -> None:
    if value != confirmation:
        raise ValidationError(message)


def require_coordinate(value, field_name: str, limit: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválida")
    if not -limit <= number <= limit:
        raise ValidationError(f"{field_name} fora do intervalo permitido")
    return number
