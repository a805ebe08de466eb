from fastapi import APIRouter

router = APIRouter(prefix="/entitlements", tags=["Entitlements"])

from src.routes.entitlements.entitlements import (  # noqa
    downgrade_expired_tiers,
    get_entitlements,
    reconcile_entitlements,
)
