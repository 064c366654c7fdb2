# assinaturas/main.py
import asyncio
import hmac
import logging
from typing import Optional

from flask import Flask, request, jsonify
from supabase import Client
from telegram import Update
from telegram.ext import Application

from assinaturas import config
from assinaturas.bot.notifier import Outbox, deliver
from assinaturas.core.recurrence import next_occurrence
from assinaturas.core.reminders import run_reminder_job
from assinaturas.utils import date_utils
from assinaturas.utils.date_utils import InvalidDateError, to_date

logger = logging.getLogger(__name__)

WEBHOOK_PATH_SUFFIX = "/webhook"


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _error(message: str, status: int):
    return jsonify({"status": "error", "message": message}), status


def create_app(
    supabase_client: Client,
    ptb_application: Optional[Application] = None,
    job_token: Optional[str] = config.JOB_TOKEN,
    telegram_token: Optional[str] = config.TELEGRAM_BOT_TOKEN,
) -> Flask:
    """Monta a aplicação Flask (webhook do Telegram, data da próxima cobrança e job de lembretes)."""
    flask_app = Flask(__name__)

    @flask_app.route("/api/next-billing-date", methods=["GET"])
    def next_billing_date():
        # Implementação única da data da próxima cobrança, para qualquer consumidor do servidor
        initial_date = request.args.get("initial_date")
        renewal_period = request.args.get("renewal_period_text")
        if not initial_date or renewal_period is None:
            return _error("Parâmetros obrigatórios: initial_date e renewal_period_text", 400)

        try:
            today = to_date(request.args["today"]) if "today" in request.args else date_utils.today()
            result = next_occurrence(initial_date, renewal_period, today)
        except InvalidDateError as e:
            return _error(str(e), 400)

        return jsonify({"next_billing_date": result.isoformat()}), 200

    @flask_app.route("/jobs/reminders", methods=["POST"])
    def reminders_job():
        provided = request.headers.get("X-Job-Token", "")
        if not job_token or not hmac.compare_digest(provided, job_token):
            logger.warning("Tentativa de disparar o job de lembretes com token inválido.")
            return _error("Token inválido", 403)

        try:
            today = to_date(request.args["today"]) if "today" in request.args else date_utils.today()
        except InvalidDateError as e:
            return _error(str(e), 400)

        outbox = Outbox() if telegram_token else None
        try:
            summary = run_reminder_job(
                supabase_client,
                today,
                sender=outbox,
                default_reminder_days=config.REMINDER_DAYS,
                currency_symbol=config.CURRENCY_SYMBOL,
            )
            delivered = asyncio.run(deliver(telegram_token, outbox.messages)) if outbox and outbox.messages else 0
        except Exception as e:
            logger.exception("Falha no job de lembretes: %s", e)
            return _error("Falha ao executar o job de lembretes", 500)

        body = summary.as_dict()
        body["delivered"] = delivered
        body["status"] = "ok"
        return jsonify(body), 200

    if ptb_application is not None:
        @flask_app.route(WEBHOOK_PATH_SUFFIX, methods=["POST"])
        async def telegram_webhook():
            if not request.is_json:
                logger.error("Webhook recebeu uma requisição que não é JSON.")
                return _error("Request must be JSON", 400)

            update_json = request.get_json()
            try:
                update = Update.de_json(update_json, ptb_application.bot)
                await ptb_application.process_update(update)
                return jsonify({"status": "ok"}), 200
            except Exception as e:
                logger.exception("Falha ao processar atualização do Telegram: %s", e)
                return _error("Failed to process update", 500)

    return flask_app
