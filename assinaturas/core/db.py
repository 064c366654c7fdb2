# assinaturas/core/db.py
import logging
from supabase import create_client, Client
from assinaturas.config import SUPABASE_URL, SUPABASE_KEY
from typing import Union, List, Dict, Any

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """Retorna uma instância do cliente Supabase."""
    return create_client(SUPABASE_URL, SUPABASE_KEY)


# --- Funções para Assinaturas ---
def list_active_subscriptions(supabase_client: Client, owner_id: str) -> List[Dict[str, Any]]:
    """Obtém as assinaturas ativas de um usuário, ordenadas por nome."""
    try:
        response = (
            supabase_client.table('subscriptions')
            .select('*')
            .eq('user_id', owner_id)
            .eq('active', True)
            .order('name')
            .execute()
        )
        return response.data
    except Exception as e:
        logger.error("Erro ao obter assinaturas do usuário %s no Supabase: %s", owner_id, e)
        return []


def create_subscription(supabase_client: Client, owner_id: str, fields: Dict[str, Any]) -> Union[Dict[str, Any], None]:
    """Cria uma assinatura para o usuário e retorna a linha criada."""
    try:
        record = dict(fields)
        record['user_id'] = owner_id
        response = supabase_client.table('subscriptions').insert(record).execute()
        return response.data[0] if response.data else None
    except Exception as e:
        logger.error("Erro ao adicionar assinatura ao Supabase: %s", e)
        return None


def update_subscription(supabase_client: Client, subscription_id: str, fields: Dict[str, Any]) -> Union[Dict[str, Any], None]:
    """Atualiza os campos informados de uma assinatura e retorna a linha atualizada."""
    try:
        response = supabase_client.table('subscriptions').update(fields).eq('id', subscription_id).execute()
        return response.data[0] if response.data else None
    except Exception as e:
        logger.error("Erro ao atualizar assinatura %s: %s", subscription_id, e)
        return None


def delete_subscription(supabase_client: Client, subscription_id: str) -> bool:
    """Remove uma assinatura pelo id."""
    try:
        supabase_client.table('subscriptions').delete().eq('id', subscription_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao deletar assinatura %s: %s", subscription_id, e)
        return False


# --- Funções para Configurações de Usuário ---
def get_users_with_notifications(supabase_client: Client) -> List[Dict[str, Any]]:
    """Obtém as configurações dos usuários com notificações ativadas."""
    try:
        response = supabase_client.table('user_settings').select('*').eq('notification_enabled', True).execute()
        return response.data
    except Exception as e:
        logger.error("Erro ao buscar usuários com notificações ativadas: %s", e)
        return []


def get_owner_by_chat_id(supabase_client: Client, chat_id: Union[int, str]) -> Union[Dict[str, Any], None]:
    """Obtém as configurações do usuário vinculado a um chat do Telegram."""
    try:
        response = (
            supabase_client.table('user_settings')
            .select('*')
            .eq('telegram_chat_id', str(chat_id))
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None
    except Exception as e:
        logger.error("Erro ao buscar usuário do chat %s: %s", chat_id, e)
        return None


# --- Funções para Notificações ---
def add_notification(supabase_client: Client, owner_id: str, subscription_id: Union[str, None], title: str, message: str, notification_date: str) -> Union[Dict[str, Any], None]:
    """Registra uma notificação para o usuário."""
    try:
        response = supabase_client.table('notifications').insert({
            "user_id": owner_id,
            "subscription_id": subscription_id,
            "title": title,
            "message": message,
            "notification_date": notification_date,
            "is_read": False
        }).execute()
        return response.data[0] if response.data else None
    except Exception as e:
        logger.error("Erro ao criar notificação no Supabase: %s", e)
        return None
