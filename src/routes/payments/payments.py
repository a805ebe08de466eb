from fastapi import Depends, HTTPException, status

from src.interfaces.payment import PaymentHistoryResponse, PendingPaymentRequest
from src.routes.payments import router
from src.services.auth import verify_admin_secret
from src.services.payment import PaymentService
from src.utils.errors import PaymentWebhookError, UserNotFound
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


@router.post(
    "",
    description="Record a pending tier purchase and get the order id to charge at the gateway",
    dependencies=[Depends(verify_admin_secret)],
)  # type: ignore
async def create_pending_payment(request: PendingPaymentRequest) -> PaymentHistoryResponse:
    try:
        return PaymentService.create_pending_payment(request.user_id, request.tier)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except PaymentWebhookError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error in create_pending_payment: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
