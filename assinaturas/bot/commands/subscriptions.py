from telegram import Update
from telegram.ext import ContextTypes

from assinaturas.config import CURRENCY_SYMBOL, UPCOMING_WINDOW_DAYS
from assinaturas.core.periods import period_label
from assinaturas.core.recurrence import next_occurrence, project_occurrences, upcoming_charges
from assinaturas.utils import date_utils
from assinaturas.utils.text_utils import normalize_label
from .utils import format_date, format_money, load_subscriptions


async def list_subscriptions_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista as assinaturas ativas com a próxima cobrança."""
    subscriptions = await load_subscriptions(update, context)
    if subscriptions is None:
        return
    if not subscriptions:
        await update.message.reply_text("Você ainda não tem assinaturas ativas.")
        return

    today = date_utils.today()
    message = "**Suas assinaturas:**\n\n"
    for sub in subscriptions:
        due_date = next_occurrence(sub.billing_date, sub.renewal_period, today)
        message += (
            f"- {sub.name}: {format_money(sub.amount, CURRENCY_SYMBOL)} "
            f"({period_label(sub.renewal_period)}) - próxima em {format_date(due_date)}\n"
        )
    await update.message.reply_text(message)


async def upcoming_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra as cobranças da janela de próximos dias."""
    subscriptions = await load_subscriptions(update, context)
    if subscriptions is None:
        return

    charges = upcoming_charges(subscriptions, date_utils.today(), UPCOMING_WINDOW_DAYS)
    if not charges:
        await update.message.reply_text(
            f"Nenhuma cobrança nos próximos {UPCOMING_WINDOW_DAYS} dias."
        )
        return

    message = f"**Próximas cobranças ({UPCOMING_WINDOW_DAYS} dias):**\n\n"
    for charge in charges:
        message += (
            f"- {format_date(charge.due_date)}: {charge.subscription.name} "
            f"({format_money(charge.subscription.amount, CURRENCY_SYMBOL)})\n"
        )
    await update.message.reply_text(message)


async def details_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra as próximas cobranças de uma assinatura pelo nome."""
    if not context.args:
        await update.message.reply_text("Por favor, informe o nome da assinatura. Ex: `/detalhes Netflix`")
        return

    subscriptions = await load_subscriptions(update, context)
    if subscriptions is None:
        return

    wanted = normalize_label(" ".join(context.args))
    sub = next((s for s in subscriptions if normalize_label(s.name) == wanted), None)
    if sub is None:
        await update.message.reply_text(f"Assinatura '{' '.join(context.args)}' não encontrada.")
        return

    dates = project_occurrences(sub.billing_date, sub.renewal_period, date_utils.today())
    message = (
        f"**{sub.name}**\n"
        f"Valor: {format_money(sub.amount, CURRENCY_SYMBOL)} ({period_label(sub.renewal_period)})\n"
        f"Categoria: {sub.category}\n\n"
        "Próximas cobranças:\n"
    )
    message += "".join(f"- {format_date(d)}\n" for d in dates)
    await update.message.reply_text(message)
