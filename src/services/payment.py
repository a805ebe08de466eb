from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from src.config import config
from src.interfaces.payment import MidtransNotification, PaymentHistoryResponse, PaymentStatus
from src.interfaces.tiers import Tier
from src.models.base import SessionLocal
from src.models.payment_history import PaymentHistory
from src.services.entitlement import EntitlementService
from src.services.store import Store
from src.services.tier import TierService
from src.utils.errors import StoreTransactionFailed, UserNotFound
from src.utils.logger import setup_logger
from src.utils.order_id import decode_order_id, encode_order_id

logger = setup_logger(__name__)

SUCCESS_TRANSACTION_STATUSES = {"capture", "settlement"}
FAILED_TRANSACTION_STATUSES = {"cancel", "deny", "expire"}


def resolve_payment_status(transaction_status: str, fraud_status: str | None) -> PaymentStatus | None:
    """
    Local payment status for a gateway transaction status, None when the status isn't one we act on.

    A captured card payment flagged "challenge" still awaits a manual review, it isn't a success yet.
    """
    if transaction_status == "capture" and fraud_status == "challenge":
        return PaymentStatus.challenge
    if transaction_status in SUCCESS_TRANSACTION_STATUSES:
        return PaymentStatus.success
    if transaction_status in FAILED_TRANSACTION_STATUSES:
        return PaymentStatus.failed
    if transaction_status == "pending":
        return PaymentStatus.pending
    return None


def triggers_reconciliation(status: PaymentStatus | None) -> bool:
    return status == PaymentStatus.success


class PaymentService:
    @staticmethod
    def process_notification(notification: MidtransNotification) -> PaymentStatus | None:
        """
        Apply an authenticated gateway notification.

        Decodes the order id, resolves the paid tier, then persists the resulting payment status. Successful
        payments also grant the tier for TIER_DURATION_DAYS and reconcile the user's mirror configs, all in the
        same transaction. Safe to call again with the same notification.

        Returns:
            The payment status written, None for statuses that are ignored
        """
        decoded = decode_order_id(notification.order_id)
        tier = TierService.resolve(notification.gross_amount)
        status = resolve_payment_status(notification.transaction_status, notification.fraud_status)

        logger.info(f"Processing payment {notification.order_id} - {notification.transaction_status}")

        if status is None:
            logger.info(
                f"Ignoring transaction status {notification.transaction_status} for payment {notification.order_id}"
            )
            return None

        try:
            with SessionLocal() as db:
                store = Store(db)
                store.update_payment_status(notification.order_id, status)

                if triggers_reconciliation(status):
                    user = store.find_user(decoded.user_id, for_update=True)
                    if user is None:
                        raise UserNotFound(f"User {decoded.user_id} not found", order_id=notification.order_id)

                    tier_expires_at = datetime.now() + timedelta(days=config.TIER_DURATION_DAYS)
                    store.update_user(decoded.user_id, tier, tier_expires_at)
                    EntitlementService.reconcile(db, decoded.user_id, tier)

                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error processing payment {notification.order_id}: {str(e)}", exc_info=True)
            raise StoreTransactionFailed(
                f"Error processing payment {notification.order_id}", order_id=notification.order_id
            )

        if status == PaymentStatus.success:
            logger.info(f"[Payment Success] User {decoded.user_id} upgraded to {tier.value}")
        elif status == PaymentStatus.failed:
            logger.info(f"Payment failed/cancelled for {notification.order_id}")
        return status

    @staticmethod
    def create_pending_payment(user_id: str, tier: Tier) -> PaymentHistoryResponse:
        """
        Record a pending payment for a tier purchase, before the customer is sent to the gateway.

        Raises:
            ValueError: the tier can't be bought
            UserNotFound: no such user
        """
        amount = TierService.price_for_tier(tier)
        order_id = encode_order_id(user_id)

        try:
            with SessionLocal() as db:
                store = Store(db)
                if store.find_user(user_id) is None:
                    raise UserNotFound(f"User {user_id} not found", order_id=order_id)

                payment = PaymentHistory(order_id=order_id, user_id=user_id, amount=amount, tier=tier)
                db.add(payment)
                db.commit()
                db.refresh(payment)

                logger.debug(f"Created pending payment {order_id} for user {user_id} ({tier.value}, {amount})")
                return PaymentHistoryResponse(
                    order_id=payment.order_id,
                    user_id=payment.user_id,
                    status=payment.status,
                    amount=payment.amount,
                    tier=payment.tier,
                    created_at=payment.created_at,
                )
        except SQLAlchemyError as e:
            logger.error(f"Error creating pending payment for {user_id}: {str(e)}", exc_info=True)
            raise StoreTransactionFailed(f"Error creating pending payment for {user_id}", order_id=order_id)
