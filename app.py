# app.py
# Ponto de entrada WSGI (gunicorn app:wsgi_app). Toda a configuração roda
# uma única vez, quando o módulo é carregado.
import asyncio
import logging

from assinaturas import config
from assinaturas.bot.bot_setup import setup_bot
from assinaturas.core.db import get_supabase_client
from assinaturas.main import configure_logging, create_app

configure_logging()
logger = logging.getLogger("app")

try:
    supabase_client = get_supabase_client()
    logger.info("Cliente Supabase inicializado.")

    ptb_application = None
    if config.TELEGRAM_BOT_TOKEN:
        ptb_application = setup_bot({
            "TELEGRAM_BOT_TOKEN": config.TELEGRAM_BOT_TOKEN,
            "SUPABASE_CLIENT": supabase_client,
        })
        # A Application do python-telegram-bot precisa ser inicializada uma vez no startup
        asyncio.run(ptb_application.initialize())
        logger.info("python-telegram-bot Application inicializada.")
    else:
        logger.warning("TELEGRAM_BOT_TOKEN não definido; webhook do Telegram desativado.")

    wsgi_app = create_app(supabase_client, ptb_application)
except Exception:
    logger.exception("Erro crítico durante a inicialização da aplicação.")
    raise
