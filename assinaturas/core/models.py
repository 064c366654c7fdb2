# assinaturas/core/models.py
import logging
import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from assinaturas.utils.date_utils import to_date

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Não categorizado"


def parse_amount(value: Any) -> Decimal:
    """Converte o valor vindo do Supabase para Decimal. Valores ilegíveis viram zero."""
    if value is None:
        return Decimal(0)
    try:
        # str() evita carregar o ruído binário de floats para o Decimal
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        amount = None
    # NaN e Infinity passam pelo Decimal, mas não podem ser comparados nem somados
    if amount is None or not amount.is_finite():
        logger.warning("Valor de assinatura ilegível (%r), tratado como zero.", value)
        return Decimal(0)
    return amount


class Subscription:
    """Assinatura como lida da tabela ``subscriptions``.

    Só ``amount``, ``billing_date``, ``renewal_period``, ``active`` e
    ``category`` são interpretados pelos cálculos; o resto é repassado
    para a apresentação.
    """

    def __init__(
        self,
        amount: Decimal,
        billing_date: datetime.date,
        renewal_period: str,
        active: bool = True,
        category: Optional[str] = None,
        id: Optional[str] = None,
        user_id: Optional[str] = None,
        name: str = "",
        description: Optional[str] = None,
        color: Optional[str] = None,
        payment_method: Optional[str] = None,
    ):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.description = description
        self.amount = amount
        self.billing_date = billing_date
        self.renewal_period = renewal_period
        self.active = active
        self.category = category or UNCATEGORIZED
        self.color = color
        self.payment_method = payment_method

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Subscription":
        """Monta a assinatura a partir de uma linha do Supabase.

        Levanta ``InvalidDateError`` se ``billing_date`` não for uma data válida.
        """
        return cls(
            id=record.get("id"),
            user_id=record.get("user_id"),
            name=record.get("name") or "",
            description=record.get("description"),
            amount=parse_amount(record.get("amount")),
            billing_date=to_date(record.get("billing_date")),
            renewal_period=record.get("renewal_period") or "",
            active=bool(record.get("active", True)),
            category=record.get("category"),
            color=record.get("color"),
            payment_method=record.get("payment_method"),
        )

    def __repr__(self) -> str:
        return (
            f"Subscription(name={self.name!r}, amount={self.amount}, "
            f"billing_date={self.billing_date}, renewal_period={self.renewal_period!r})"
        )


def subscriptions_from_records(records: List[Dict[str, Any]]) -> List[Subscription]:
    return [Subscription.from_record(record) for record in records]


class UpcomingCharge:
    def __init__(self, subscription: Subscription, due_date: datetime.date):
        self.subscription = subscription
        self.due_date = due_date

    def __repr__(self) -> str:
        return f"UpcomingCharge({self.subscription.name!r}, {self.due_date})"


class CategoryTotal:
    def __init__(self, category: str, amount: Decimal):
        self.category = category
        self.amount = amount

    def __eq__(self, other) -> bool:
        if not isinstance(other, CategoryTotal):
            return NotImplemented
        return self.category == other.category and self.amount == other.amount

    def __repr__(self) -> str:
        return f"CategoryTotal({self.category!r}, {self.amount})"
