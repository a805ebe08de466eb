from fastapi import Depends, HTTPException, status

from src.interfaces.mirror import EntitlementSummary, ExpiredTiersResponse
from src.routes.entitlements import router
from src.services.auth import verify_admin_secret
from src.services.entitlement import EntitlementService
from src.utils.cron import scheduler
from src.utils.errors import PaymentWebhookError, UserNotFound
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


@scheduler.scheduled_job("interval", hours=1)
@router.post(
    "/downgrade-expired",
    description="Move users with an expired paid tier back to FREE",
    dependencies=[Depends(verify_admin_secret)],
)  # type: ignore
async def downgrade_expired_tiers() -> ExpiredTiersResponse:
    """
    Downgrade expired users and recompute their mirror paths.
    This can be called manually or via scheduled job.
    """
    try:
        return EntitlementService.downgrade_expired_users()
    except Exception as e:
        logger.error(f"Error downgrading expired tiers: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Error downgrading expired tiers: {str(e)}"
        )


@router.get("/{user_id}", dependencies=[Depends(verify_admin_secret)])  # type: ignore
async def get_entitlements(user_id: str) -> EntitlementSummary:
    """Get a user's tier and the admission state of each of their mirror paths."""
    try:
        return EntitlementService.get_entitlements(user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except Exception as e:
        logger.error(f"Error in get_entitlements: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/{user_id}/reconcile", dependencies=[Depends(verify_admin_secret)])  # type: ignore
async def reconcile_entitlements(user_id: str) -> EntitlementSummary:
    """Recompute a user's mirror paths under their current tier, e.g. after they added or removed one."""
    try:
        EntitlementService.reconcile_current_tier(user_id)
        return EntitlementService.get_entitlements(user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except PaymentWebhookError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error in reconcile_entitlements: {str(e)}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
