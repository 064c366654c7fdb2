from telegram import Update
from telegram.ext import ContextTypes

from assinaturas.config import CURRENCY_SYMBOL
from assinaturas.core import charts
from assinaturas.core.aggregation import (
    category_breakdown, category_shares, monthly_and_yearly_totals, total_at_frequency,
)
from assinaturas.core.periods import is_canonical, normalize, period_label
from assinaturas.utils import date_utils
from .utils import format_money, load_subscriptions


async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia os custos mensal/anual e o gráfico por categoria."""
    subscriptions = await load_subscriptions(update, context)
    if subscriptions is None:
        return

    today = date_utils.today()
    monthly, yearly = monthly_and_yearly_totals(subscriptions, today)
    breakdown = category_breakdown(subscriptions, today)

    message = (
        "**Resumo das assinaturas:**\n\n"
        f"Mensal: {format_money(monthly, CURRENCY_SYMBOL)}\n"
        f"Anual: {format_money(yearly, CURRENCY_SYMBOL)}\n"
    )
    if breakdown:
        message += "\nPor categoria (custo mensal):\n"
        message += "".join(
            f"- {item.category}: {format_money(item.amount, CURRENCY_SYMBOL)} ({share:.1f}%)\n"
            for item, share in zip(breakdown, category_shares(breakdown))
        )
    await update.message.reply_text(message)

    chart_buffer = charts.generate_category_chart(breakdown, CURRENCY_SYMBOL)
    if chart_buffer:
        chart_buffer.name = "categorias_chart.png"
        await update.message.reply_photo(photo=chart_buffer, caption="Custo mensal por categoria")


async def total_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Total das assinaturas convertido para a frequência pedida."""
    if not context.args:
        await update.message.reply_text(
            "Por favor, informe a frequência. Ex: `/total semanal` ou `/total anual`"
        )
        return

    frequency = normalize(" ".join(context.args))
    if not is_canonical(frequency):
        await update.message.reply_text(
            f"Frequência '{' '.join(context.args)}' não reconhecida. "
            "Use diario, semanal, mensal, trimestral ou anual."
        )
        return

    subscriptions = await load_subscriptions(update, context)
    if subscriptions is None:
        return

    total = total_at_frequency(subscriptions, frequency, date_utils.today())
    await update.message.reply_text(
        f"Total {period_label(frequency).lower()}: {format_money(total, CURRENCY_SYMBOL)}"
    )
