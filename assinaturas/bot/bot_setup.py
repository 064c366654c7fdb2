# assinaturas/bot/bot_setup.py
import logging
from telegram.ext import Application, CommandHandler
from assinaturas.bot.commands import ALL_COMMANDS

logger = logging.getLogger(__name__)


def setup_bot(config: dict) -> Application:
    """
    Configura a aplicação do bot do Telegram (comandos).
    Retorna o objeto Application configurado, pronto para ser usado pelo servidor WSGI.
    """
    application = Application.builder().token(config["TELEGRAM_BOT_TOKEN"]).build()

    # Cliente Supabase disponível para todos os comandos
    application.bot_data['supabase_client'] = config["SUPABASE_CLIENT"]

    for name, handler in ALL_COMMANDS:
        application.add_handler(CommandHandler(name, handler))

    logger.info("Bot Telegram configurado para webhooks com %d comandos.", len(ALL_COMMANDS))
    # Não chamamos application.run_polling(): as atualizações chegam pelo webhook do Flask
    return application
