# assinaturas/bot/commands/__init__.py

from .utils import start_command, help_command
from .subscriptions import details_command, list_subscriptions_command, upcoming_command
from .summary import summary_command, total_command

# (comando, handler)
ALL_COMMANDS = [
    ("start", start_command),
    ("help", help_command),
    ("assinaturas", list_subscriptions_command),
    ("proximas", upcoming_command),
    ("detalhes", details_command),
    ("resumo", summary_command),
    ("total", total_command),
]
