# assinaturas/core/recurrence.py
"""Cálculo da próxima cobrança e das cobranças seguintes de uma assinatura.

Todas as funções são puras: recebem a data âncora (primeira cobrança), o
período e o "hoje" explicitamente. Cada ocorrência é calculada como
``âncora + k períodos`` a partir da âncora, nunca encadeando a ocorrência
anterior, para que âncoras no fim do mês não escorreguem
(31/01 -> 29/02 -> 31/03).
"""
import datetime
from typing import Iterable, List, Optional

from assinaturas.core.models import Subscription, UpcomingCharge
from assinaturas.core.periods import DAILY, PERIOD_STEPS, normalize, resolve_period
from assinaturas.utils import date_utils
from assinaturas.utils.date_utils import DateLike, add_months, months_between, to_date

DAILY_PROJECTION_COUNT = 7
DEFAULT_PROJECTION_COUNT = 3


def _resolve_today(today: Optional[DateLike]) -> datetime.date:
    return date_utils.today() if today is None else to_date(today)


def _advance(anchor: datetime.date, unit: str, amount: int) -> datetime.date:
    if unit == "days":
        return anchor + datetime.timedelta(days=amount)
    return add_months(anchor, amount)


def _first_index(anchor: datetime.date, unit: str, step: int, today: datetime.date) -> int:
    """Menor k tal que ``âncora + k * step`` cai em ``today`` ou depois."""
    if anchor >= today:
        return 0
    if unit == "days":
        diff = (today - anchor).days
        return -(-diff // step)
    # Estimativa fechada pelo número de meses; no máximo um ou dois ajustes depois
    k = max(months_between(anchor, today) // step, 0)
    while add_months(anchor, k * step) < today:
        k += 1
    return k


def next_occurrence(
    anchor_date: DateLike, period: str, today: Optional[DateLike] = None
) -> datetime.date:
    """Próxima cobrança em ``today`` ou depois.

    Se a âncora já é hoje ou futura, ela mesma é devolvida. Períodos
    desconhecidos seguem a regra mensal (ver ``resolve_period``).
    Levanta ``InvalidDateError`` para datas malformadas.
    """
    anchor = to_date(anchor_date)
    today = _resolve_today(today)
    if anchor >= today:
        return anchor

    unit, step = PERIOD_STEPS[resolve_period(period)]
    return _advance(anchor, unit, step * _first_index(anchor, unit, step, today))


def default_projection_count(period: str) -> int:
    # Três cobranças diárias não dizem nada ao usuário; mostramos uma semana
    return DAILY_PROJECTION_COUNT if normalize(period) == DAILY else DEFAULT_PROJECTION_COUNT


def project_occurrences(
    anchor_date: DateLike,
    period: str,
    today: Optional[DateLike] = None,
    count: Optional[int] = None,
) -> List[datetime.date]:
    """A próxima cobrança seguida de ``count - 1`` cobranças seguintes.

    ``count=None`` usa ``default_projection_count(period)``.
    """
    anchor = to_date(anchor_date)
    today = _resolve_today(today)
    if count is None:
        count = default_projection_count(period)
    if count < 1:
        return []

    unit, step = PERIOD_STEPS[resolve_period(period)]
    first = _first_index(anchor, unit, step, today)
    return [_advance(anchor, unit, step * (first + i)) for i in range(count)]


def days_until(target: DateLike, today: Optional[DateLike] = None) -> int:
    return (to_date(target) - _resolve_today(today)).days


def upcoming_charges(
    subscriptions: Iterable[Subscription],
    today: Optional[DateLike] = None,
    window_days: int = 7,
) -> List[UpcomingCharge]:
    """Assinaturas ativas com cobrança entre hoje e hoje + ``window_days``, em ordem de data."""
    today = _resolve_today(today)
    window_end = today + datetime.timedelta(days=window_days)

    charges = []
    for sub in subscriptions:
        if not sub.active:
            continue
        due_date = next_occurrence(sub.billing_date, sub.renewal_period, today)
        if due_date <= window_end:
            charges.append(UpcomingCharge(sub, due_date))
    return sorted(charges, key=lambda charge: charge.due_date)
