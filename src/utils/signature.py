import hashlib
import hmac

from src.config import config
from src.interfaces.payment import MidtransNotification
from src.utils.errors import Forbidden, Unauthorized
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


def get_notification_signature(order_id: str, status_code: str, gross_amount: str, server_key: str) -> str:
    """SHA512 hex digest Midtrans attaches to notifications as signature_key."""
    return hashlib.sha512(f"{order_id}{status_code}{gross_amount}{server_key}".encode()).hexdigest()


def verify_path_secret(path_secret: str) -> None:
    expected = config.MIDTRANS_WEBHOOK_SECRET
    # An unset secret must never match, not even an empty path segment
    if not expected or not hmac.compare_digest(path_secret.encode(), expected.encode()):
        logger.warning("Rejected payment notification: invalid path secret")
        raise Unauthorized("Invalid webhook secret")


def verify_notification_signature(notification: MidtransNotification) -> None:
    expected_signature = get_notification_signature(
        notification.order_id, notification.status_code, notification.gross_amount, config.MIDTRANS_SERVER_KEY
    )

    # Secure comparison to prevent timing attacks
    if not hmac.compare_digest(expected_signature.encode(), notification.signature_key.encode()):
        logger.warning(f"Rejected payment notification {notification.order_id}: invalid signature")
        raise Forbidden("Invalid signature", order_id=notification.order_id)


def authenticate_notification(path_secret: str, notification: MidtransNotification) -> None:
    """Raises Unauthorized or Forbidden unless the notification is genuine and addressed to us."""
    verify_path_secret(path_secret)
    verify_notification_signature(notification)
