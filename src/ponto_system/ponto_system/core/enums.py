from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Tipos de registro de ponto (valor usado na API e no banco)."""

    ENTRADA = "entrada"
    SAIDA_ALMOCO = "saida_almoco"
    RETORNO_ALMOCO = "retorno_almoco"
    SAIDA = "saida"


class WorkStatus(str, Enum):
    """Situação atual do funcionário, derivada do último registro."""

    AWAITING_FIRST_PUNCH = "AWAITING_FIRST_PUNCH"
    WORKING = "WORKING"
    OFF_WORK = "OFF_WORK"


class LunchPolicy(str, Enum):
    """Como o intervalo de almoço entra no cálculo de horas trabalhadas.

    EXCLUDE: saida_almoco fecha o intervalo e retorno_almoco abre outro,
    então o almoço não conta como trabalhado.
    INCLUDE: registros de almoço são ignorados pelo cálculo.
    """

    EXCLUDE = "exclude"
    INCLUDE = "include"


class FieldState(str, Enum):
    VIEWING = "VIEWING"
    EDITING = "EDITING"
