# assinaturas/bot/notifier.py
import logging
from typing import List, Tuple, Union

from telegram import Bot
from telegram.error import TelegramError

logger = logging.getLogger(__name__)


class Outbox:
    """Acumula as mensagens do job de lembretes para entrega em lote."""

    def __init__(self):
        self.messages: List[Tuple[Union[int, str], str]] = []

    def __call__(self, chat_id: Union[int, str], text: str) -> None:
        self.messages.append((chat_id, text))


async def deliver(token: str, messages: List[Tuple[Union[int, str], str]]) -> int:
    """Envia as mensagens pelo Telegram. Retorna quantas foram entregues."""
    delivered = 0
    async with Bot(token) as bot:
        for chat_id, text in messages:
            try:
                await bot.send_message(chat_id=chat_id, text=text)
                delivered += 1
            except TelegramError as e:
                logger.error("Erro ao enviar lembrete para o chat %s: %s", chat_id, e)
    return delivered
