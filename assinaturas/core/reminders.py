# assinaturas/core/reminders.py
"""Job de lembretes de cobrança.

Percorre os usuários com notificações ativadas e, para cada assinatura
ativa que vence hoje ou nos próximos ``reminder_days`` dias, grava uma
notificação e (se houver chat vinculado) entrega a mensagem.
"""
import datetime
import logging
from typing import Callable, Optional, Union

from supabase import Client

from assinaturas.core import db
from assinaturas.core.models import Subscription
from assinaturas.core.recurrence import days_until, next_occurrence
from assinaturas.utils.date_utils import DateLike, InvalidDateError, to_date

logger = logging.getLogger(__name__)

# sender(chat_id, texto)
Sender = Callable[[Union[int, str], str], None]


class Reminder:
    def __init__(self, subscription: Subscription, title: str, message: str, days_until: int, due_date: datetime.date):
        self.subscription = subscription
        self.title = title
        self.message = message
        self.days_until = days_until
        self.due_date = due_date

    def as_text(self) -> str:
        return f"{self.title}\n{self.message}"


class ReminderRunSummary:
    def __init__(self):
        self.users = 0
        self.created = 0
        self.queued = 0
        self.skipped = 0

    def as_dict(self) -> dict:
        return {"users": self.users, "created": self.created, "queued": self.queued, "skipped": self.skipped}


def _plural_days(n: int) -> str:
    return f"{n} dia{'s' if n != 1 else ''}"


def build_reminder(
    sub: Subscription,
    today: DateLike,
    reminder_days: int = 3,
    currency_symbol: str = "R$",
) -> Optional[Reminder]:
    """Monta o lembrete da assinatura, ou ``None`` se a cobrança está além da janela."""
    today = to_date(today)
    due_date = next_occurrence(sub.billing_date, sub.renewal_period, today)
    remaining = days_until(due_date, today)
    if remaining < 0 or remaining > reminder_days:
        return None

    value = f"{currency_symbol} {sub.amount:.2f}"
    if remaining == 0:
        title = "Renovação Hoje"
        message = f"Sua assinatura {sub.name} é renovada hoje. Valor: {value}"
    else:
        title = f"Lembrete: {_plural_days(remaining)} para pagamento"
        message = f"Sua assinatura {sub.name} será cobrada em {_plural_days(remaining)}. Valor: {value}"
    return Reminder(sub, title, message, remaining, due_date)


def run_reminder_job(
    supabase_client: Client,
    today: DateLike,
    sender: Optional[Sender] = None,
    default_reminder_days: int = 3,
    currency_symbol: str = "R$",
) -> ReminderRunSummary:
    today = to_date(today)
    summary = ReminderRunSummary()

    for user in db.get_users_with_notifications(supabase_client):
        summary.users += 1
        reminder_days = user.get('reminder_days')
        if reminder_days is None:
            reminder_days = default_reminder_days
        chat_id = user.get('telegram_chat_id')

        for record in db.list_active_subscriptions(supabase_client, user['id']):
            try:
                sub = Subscription.from_record(record)
            except InvalidDateError as e:
                logger.warning("Assinatura %s ignorada no job de lembretes: %s", record.get('id'), e)
                summary.skipped += 1
                continue

            reminder = build_reminder(sub, today, reminder_days, currency_symbol)
            if reminder is None:
                continue

            notification = db.add_notification(
                supabase_client,
                user['id'],
                sub.id,
                reminder.title,
                reminder.message,
                datetime.datetime.now(datetime.timezone.utc).isoformat(),
            )
            if notification is None:
                continue
            summary.created += 1

            if sender and chat_id:
                try:
                    sender(chat_id, reminder.as_text())
                    summary.queued += 1
                except Exception as e:
                    logger.error("Erro ao enviar lembrete da assinatura %s: %s", sub.id, e)

    logger.info(
        "Job de lembretes concluído: %d usuários, %d notificações criadas, %d na fila de envio, %d ignoradas.",
        summary.users, summary.created, summary.queued, summary.skipped,
    )
    return summary
