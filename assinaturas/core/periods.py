# assinaturas/core/periods.py
"""Normalização dos períodos de renovação.

Os registros guardam o período como texto livre, em português ou inglês e
com ou sem acento ("Mensal", "mensal", "monthly", "Diário"...). Tudo que
calcula datas ou valores trabalha com um dos cinco valores canônicos abaixo.
"""
import logging
from typing import Tuple

from assinaturas.utils.text_utils import capitalize_first, normalize_label

logger = logging.getLogger(__name__)

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
QUARTERLY = "quarterly"
YEARLY = "yearly"

CANONICAL_PERIODS = (DAILY, WEEKLY, MONTHLY, QUARTERLY, YEARLY)

# Fallback para qualquer período desconhecido
DEFAULT_PERIOD = MONTHLY

PERIOD_ALIASES = {
    "diario": DAILY,
    "daily": DAILY,
    "semanal": WEEKLY,
    "weekly": WEEKLY,
    "mensal": MONTHLY,
    "monthly": MONTHLY,
    "trimestral": QUARTERLY,
    "quarterly": QUARTERLY,
    "anual": YEARLY,
    "yearly": YEARLY,
}

PERIOD_LABELS = {
    DAILY: "Diário",
    WEEKLY: "Semanal",
    MONTHLY: "Mensal",
    QUARTERLY: "Trimestral",
    YEARLY: "Anual",
}

# Avanço de calendário de um período: (unidade, quantidade)
PERIOD_STEPS = {
    DAILY: ("days", 1),
    WEEKLY: ("days", 7),
    MONTHLY: ("months", 1),
    QUARTERLY: ("months", 3),
    YEARLY: ("months", 12),
}


def normalize(period_label: str) -> str:
    """Converte um rótulo de período para o valor canônico.

    Rótulos não reconhecidos voltam sem acento e em minúsculas, sem erro.
    Rótulo vazio ou ``None`` volta como string vazia ("sem período").
    """
    norm = normalize_label(period_label)
    if not norm:
        return ""
    return PERIOD_ALIASES.get(norm, norm)


def is_canonical(period: str) -> bool:
    return period in CANONICAL_PERIODS


def resolve_period(period_label: str) -> str:
    """Como ``normalize``, mas sempre devolve um período canônico.

    Qualquer valor fora dos cinco canônicos (inclusive vazio) é tratado
    como mensal. Isso altera totais financeiros, então fica registrado no log.
    """
    period = normalize(period_label)
    if is_canonical(period):
        return period
    logger.warning(
        "Período de renovação desconhecido %r; usando %r como fallback.",
        period_label,
        DEFAULT_PERIOD,
    )
    return DEFAULT_PERIOD


def period_label(label: str) -> str:
    """Rótulo de exibição em português ("mensal" -> "Mensal", "daily" -> "Diário")."""
    period = normalize(label)
    return PERIOD_LABELS.get(period, capitalize_first(period))


def period_step(period: str) -> Tuple[str, int]:
    return PERIOD_STEPS[resolve_period(period)]
