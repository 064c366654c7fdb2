# assinaturas/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Configurações do Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Configurações do Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# Lembretes e listagens
REMINDER_DAYS = int(os.getenv("REMINDER_DAYS", "3"))  # dias de antecedência do lembrete
UPCOMING_WINDOW_DAYS = int(os.getenv("UPCOMING_WINDOW_DAYS", "7"))
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "R$")

# Segredo exigido pelo endpoint que dispara o job de lembretes
JOB_TOKEN = os.getenv("JOB_TOKEN")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
