import logging
from typing import List, Union

from telegram import Update
from telegram.ext import ContextTypes

from assinaturas.core import db
from assinaturas.core.models import Subscription
from assinaturas.utils.date_utils import InvalidDateError

logger = logging.getLogger(__name__)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /start é emitido."""
    await update.message.reply_text(
        "Olá! Sou o bot das suas assinaturas. Acompanho suas cobranças recorrentes "
        "e te aviso antes de cada renovação.\n\n"
        "Comandos úteis:\n"
        "- `/assinaturas` para listar suas assinaturas ativas.\n"
        "- `/proximas` para ver as cobranças dos próximos dias.\n"
        "- `/resumo` para ver seus custos mensal e anual por categoria.\n"
        "- `/total [frequência]` para ver o total em outra frequência.\n"
        "- `/detalhes [nome]` para ver as próximas cobranças de uma assinatura.\n"
        "- `/help` para mais informações."
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /help é emitido."""
    await update.message.reply_text(
        "**Comandos:**\n"
        "- `/start`: Mensagem de boas-vindas.\n"
        "- `/help`: Mostra esta mensagem.\n"
        "- `/assinaturas`: Lista as assinaturas ativas com a próxima cobrança de cada uma.\n"
        "- `/proximas`: Cobranças de hoje até os próximos dias.\n"
        "- `/resumo`: Custo mensal e anual, com gráfico por categoria.\n"
        "- `/total [frequência]`: Total convertido para `diario`, `semanal`, `mensal`, `trimestral` ou `anual` "
        "(também aceita `daily`, `weekly`, `monthly`, `quarterly`, `yearly`).\n"
        "- `/detalhes [nome]`: Próximas cobranças de uma assinatura (ex: `/detalhes Netflix`).\n\n"
        "Seu chat precisa estar vinculado à sua conta no app para que eu encontre suas assinaturas."
    )


def format_money(value, currency_symbol: str = "R$") -> str:
    return f"{currency_symbol} {value:.2f}"


def format_date(value) -> str:
    return value.strftime("%d/%m/%Y")


async def load_subscriptions(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Union[List[Subscription], None]:
    """Carrega as assinaturas ativas do dono do chat. Responde e retorna None se o chat não está vinculado."""
    supabase_client = context.bot_data["supabase_client"]
    owner = db.get_owner_by_chat_id(supabase_client, update.effective_chat.id)
    if not owner:
        await update.message.reply_text(
            "Não encontrei uma conta vinculada a este chat. Vincule seu Telegram nas configurações do app."
        )
        return None

    subscriptions = []
    for record in db.list_active_subscriptions(supabase_client, owner["id"]):
        try:
            subscriptions.append(Subscription.from_record(record))
        except InvalidDateError as e:
            logger.warning("Assinatura %s ignorada: %s", record.get("id"), e)
    return subscriptions
