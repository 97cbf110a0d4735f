"""
StockPro - Error Notification
Envia email ao administrador quando ocorre um erro inesperado (HTTP 500)
"""
import logging
import smtplib
import threading
from email.mime.text import MIMEText
from datetime import datetime
from typing import Optional

from .config import settings

logger = logging.getLogger(__name__)

# Cache para evitar spam de emails (mesmo erro em sequencia)
_error_cache = {}
_CACHE_TTL_SECONDS = 300


def _get_error_key(error_type: str, error_msg: str) -> str:
    return f"{error_type}:{error_msg[:100]}"


def _should_send_notification(error_key: str) -> bool:
    """Verifica se deve enviar notificacao (evita spam)"""
    now = datetime.utcnow()

    # Remove entradas expiradas
    for key, sent_at in list(_error_cache.items()):
        if (now - sent_at).total_seconds() >= _CACHE_TTL_SECONDS:
            del _error_cache[key]

    last_sent = _error_cache.get(error_key)
    if last_sent and (now - last_sent).total_seconds() < _CACHE_TTL_SECONDS:
        return False

    _error_cache[error_key] = now
    return True


def send_error_notification(
    error_type: str,
    error_message: str,
    error_details: Optional[str] = None,
    user_id: Optional[str] = None,
    endpoint: Optional[str] = None
) -> bool:
    """
    Envia email de notificacao de erro.

    Args:
        error_type: Tipo do erro (ex: "UNHANDLED_ERROR", "TRANSACTION_FAILURE")
        error_message: Mensagem resumida do erro
        error_details: Stack trace
        user_id: Usuario que fez a requisicao (se conhecido)
        endpoint: Metodo e caminho da requisicao

    Returns:
        True se o email foi enviado
    """
    if not settings.ERROR_NOTIFY_EMAIL:
        return False

    if not settings.SMTP_USER or not settings.SMTP_PASSWORD:
        logger.warning("SMTP nao configurado - notificacao de erro nao enviada")
        return False

    error_key = _get_error_key(error_type, error_message)
    if not _should_send_notification(error_key):
        logger.debug(f"Notificacao de erro suprimida: {error_key}")
        return False

    timestamp = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S UTC")
    lines = [
        f"Tipo: {error_type}",
        f"Mensagem: {error_message}",
        f"Data/Hora: {timestamp}",
    ]
    if endpoint:
        lines.append(f"Endpoint: {endpoint}")
    if user_id:
        lines.append(f"Usuario: {user_id}")
    if error_details:
        lines.extend(["", error_details[:4000]])

    msg = MIMEText("\n".join(lines), "plain", "utf-8")
    msg['Subject'] = f"[{settings.APP_NAME} ERRO] {error_type}: {error_message[:50]}"
    msg['From'] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg['To'] = settings.ERROR_NOTIFY_EMAIL

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as server:
            if settings.SMTP_TLS:
                server.starttls()
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Falha ao enviar notificacao de erro: {e}")
        return False

    logger.info(f"Notificacao de erro enviada: {error_type}")
    return True


def notify_error_async(
    error_type: str,
    error_message: str,
    error_details: Optional[str] = None,
    **kwargs
):
    """Dispara a notificacao em thread separada para nao bloquear a resposta"""
    thread = threading.Thread(
        target=send_error_notification,
        kwargs=dict(
            error_type=error_type,
            error_message=error_message,
            error_details=error_details,
            **kwargs
        ),
        daemon=True,
    )
    thread.start()
