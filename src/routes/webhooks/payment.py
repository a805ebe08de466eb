from fastapi import HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from src.interfaces.payment import MidtransNotification
from src.routes.webhooks import router
from src.services.payment import PaymentService
from src.utils.errors import MalformedNotification, PaymentWebhookError
from src.utils.logger import setup_logger
from src.utils.signature import verify_notification_signature, verify_path_secret

logger = setup_logger(__name__)


@router.post("/payment/{path_secret}", description="Receive transaction notifications from Midtrans")  # type: ignore
async def payment_notification(path_secret: str, request: Request) -> PlainTextResponse:
    """
    Process Midtrans HTTP notifications.

    The path secret is checked before the body is read and the signature before anything touches the database.
    Every handled status, including the ones we ignore, is acknowledged with "OK" so the gateway stops retrying;
    5xx responses make it retry later.
    """
    try:
        verify_path_secret(path_secret)

        body = await request.body()
        try:
            notification = MidtransNotification.model_validate_json(body)
        except ValidationError:
            logger.warning("Rejected payment notification: malformed body")
            raise MalformedNotification("Malformed notification")

        verify_notification_signature(notification)
        PaymentService.process_notification(notification)

    except PaymentWebhookError as e:
        if e.status_code >= 500:
            logger.error(f"Payment notification {e.order_id} failed ({type(e).__name__}): {e.message}")
        else:
            logger.warning(f"Payment notification {e.order_id} rejected ({type(e).__name__}): {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error processing payment notification: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Error")

    return PlainTextResponse("OK")
