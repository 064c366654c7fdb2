# assinaturas/core/aggregation.py
"""Totais de gastos com assinaturas normalizados para uma frequência.

Cada assinatura é convertida do seu período para a frequência pedida com a
tabela de ``conversion_table``. Os fatores usam o calendário da data de
referência (dias do mês corrente, dias do ano corrente), com duas
aproximações que fazem parte da regra e não devem ser "corrigidas":

* semanal <-> anual usa 52.14 semanas por ano, nos dois sentidos;
* um trimestre vale 3 vezes os dias do mês corrente, não a soma real de
  três meses.

Tabela (valor convertido = valor * multiplicador / divisor),
m = dias do mês corrente, a = dias do ano corrente:

    origem \\ destino  diário     semanal      mensal   trimestral   anual
    diário            1          7            m        3m           a
    semanal           1/7        1            m/7      3m/7         52.14
    mensal            1/m        7/m          1        3            12
    trimestral        1/3m       7/3m         1/3      1            4
    anual             1/a        1/52.14      1/12     1/4          1
"""
import datetime
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from assinaturas.core.models import CategoryTotal, Subscription
from assinaturas.core.periods import (
    DAILY,
    MONTHLY,
    QUARTERLY,
    WEEKLY,
    YEARLY,
    normalize,
    resolve_period,
)
from assinaturas.utils import date_utils
from assinaturas.utils.date_utils import DateLike, days_in_month, days_in_year, to_date

logger = logging.getLogger(__name__)

WEEKS_IN_YEAR = Decimal("52.14")
MONTHS_IN_YEAR = 12
QUARTERS_IN_YEAR = 4

Factor = Tuple[Decimal, Decimal]


def conversion_table(days_in_current_month: int, days_in_current_year: int) -> Dict[Tuple[str, str], Factor]:
    """Fatores ``(multiplicador, divisor)`` indexados por ``(origem, destino)``."""
    m = Decimal(days_in_current_month)
    a = Decimal(days_in_current_year)
    one = Decimal(1)
    quarter_days = m * 3

    return {
        (DAILY, DAILY): (one, one),
        (DAILY, WEEKLY): (Decimal(7), one),
        (DAILY, MONTHLY): (m, one),
        (DAILY, QUARTERLY): (quarter_days, one),
        (DAILY, YEARLY): (a, one),

        (WEEKLY, DAILY): (one, Decimal(7)),
        (WEEKLY, WEEKLY): (one, one),
        (WEEKLY, MONTHLY): (m, Decimal(7)),
        (WEEKLY, QUARTERLY): (quarter_days, Decimal(7)),
        (WEEKLY, YEARLY): (WEEKS_IN_YEAR, one),

        (MONTHLY, DAILY): (one, m),
        (MONTHLY, WEEKLY): (Decimal(7), m),
        (MONTHLY, MONTHLY): (one, one),
        (MONTHLY, QUARTERLY): (Decimal(3), one),
        (MONTHLY, YEARLY): (Decimal(MONTHS_IN_YEAR), one),

        (QUARTERLY, DAILY): (one, quarter_days),
        (QUARTERLY, WEEKLY): (Decimal(7), quarter_days),
        (QUARTERLY, MONTHLY): (one, Decimal(3)),
        (QUARTERLY, QUARTERLY): (one, one),
        (QUARTERLY, YEARLY): (Decimal(QUARTERS_IN_YEAR), one),

        (YEARLY, DAILY): (one, a),
        (YEARLY, WEEKLY): (one, WEEKS_IN_YEAR),
        (YEARLY, MONTHLY): (one, Decimal(MONTHS_IN_YEAR)),
        (YEARLY, QUARTERLY): (one, Decimal(QUARTERS_IN_YEAR)),
        (YEARLY, YEARLY): (one, one),
    }


def _resolve_reference(reference_date: Optional[DateLike]) -> datetime.date:
    return date_utils.today() if reference_date is None else to_date(reference_date)


def _table_for(reference: datetime.date) -> Dict[Tuple[str, str], Factor]:
    return conversion_table(days_in_month(reference), days_in_year(reference))


def _convert(amount: Decimal, source: str, target: str, table: Dict[Tuple[str, str], Factor]) -> Decimal:
    if source == target:
        return amount
    multiplier, divisor = table[(source, target)]
    return amount * multiplier / divisor


def _contributes(sub: Subscription) -> bool:
    # Valor zerado/negativo ou sem período não entra nos totais
    return sub.amount > 0 and bool(normalize(sub.renewal_period))


def convert_amount(
    amount: Decimal,
    source_period: str,
    target_period: str,
    reference_date: Optional[DateLike] = None,
) -> Decimal:
    """Converte um valor de um período para outro; períodos desconhecidos valem como mensal."""
    reference = _resolve_reference(reference_date)
    return _convert(
        Decimal(amount),
        resolve_period(source_period),
        resolve_period(target_period),
        _table_for(reference),
    )


def monthly_cost(sub: Subscription, reference_date: Optional[DateLike] = None) -> Decimal:
    if not _contributes(sub):
        return Decimal(0)
    return convert_amount(sub.amount, sub.renewal_period, MONTHLY, reference_date)


def total_at_frequency(
    subscriptions: Iterable[Subscription],
    target_frequency: str,
    reference_date: Optional[DateLike] = None,
) -> Decimal:
    """Soma das assinaturas ativas convertidas para ``target_frequency``.

    Lista vazia ou só com assinaturas inativas resulta em zero.
    """
    reference = _resolve_reference(reference_date)
    table = _table_for(reference)
    target = resolve_period(target_frequency)

    total = Decimal(0)
    for sub in subscriptions:
        if not sub.active or not _contributes(sub):
            continue
        total += _convert(sub.amount, resolve_period(sub.renewal_period), target, table)
    return total


def monthly_and_yearly_totals(
    subscriptions: Iterable[Subscription], reference_date: Optional[DateLike] = None
) -> Tuple[Decimal, Decimal]:
    subscriptions = list(subscriptions)
    return (
        total_at_frequency(subscriptions, MONTHLY, reference_date),
        total_at_frequency(subscriptions, YEARLY, reference_date),
    )


def category_breakdown(
    subscriptions: Iterable[Subscription], reference_date: Optional[DateLike] = None
) -> List[CategoryTotal]:
    """Custo mensal equivalente por categoria, do maior para o menor.

    Empates mantêm a ordem em que a categoria apareceu primeiro.
    """
    reference = _resolve_reference(reference_date)
    totals: Dict[str, Decimal] = {}
    for sub in subscriptions:
        if not sub.active:
            continue
        totals[sub.category] = totals.get(sub.category, Decimal(0)) + monthly_cost(sub, reference)

    breakdown = [CategoryTotal(category, amount) for category, amount in totals.items()]
    return sorted(breakdown, key=lambda item: item.amount, reverse=True)


def top_subscriptions(
    subscriptions: Iterable[Subscription],
    reference_date: Optional[DateLike] = None,
    limit: int = 5,
) -> List[Subscription]:
    """As assinaturas ativas mais caras pelo custo mensal equivalente."""
    reference = _resolve_reference(reference_date)
    active = [sub for sub in subscriptions if sub.active]
    ranked = sorted(active, key=lambda sub: monthly_cost(sub, reference), reverse=True)
    return ranked[:limit]


def category_shares(breakdown: List[CategoryTotal]) -> List[Decimal]:
    """Participação percentual de cada categoria no total, na ordem do breakdown."""
    total = sum((item.amount for item in breakdown), Decimal(0))
    if total <= 0:
        return [Decimal(0) for _ in breakdown]
    return [item.amount / total * 100 for item in breakdown]
