from datetime import datetime
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.interfaces.mirror import (
    EntitlementSummary,
    ExpiredTiersResponse,
    MirrorConfigEntitlement,
    MirrorConfigStatus,
    MirrorConfigUpdate,
)
from src.interfaces.tiers import Tier, TierPolicy
from src.models.base import SessionLocal
from src.models.mirror_config import MirrorConfig
from src.models.user import User
from src.services.store import Store
from src.services.tier import TierService
from src.tiers import TIER_POLICY_VERSION
from src.utils.errors import StoreTransactionFailed, UserNotFound
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


def is_eligible(policy: TierPolicy, config: MirrorConfig) -> bool:
    """Whether the tier allows the config's platforms at all, regardless of how many paths are running."""
    if config.source_platform not in policy.permitted_sources:
        return False
    destination = config.destination_platform
    # A chat mirrored onto itself never leaves its platform
    return destination is None or destination in policy.permitted_destinations


def compute_admissions(policy: TierPolicy, configs: Sequence[MirrorConfig]) -> list[MirrorConfigUpdate]:
    """
    Decide which configs may run under a tier policy.

    Configs must be ordered oldest first: eligible configs are admitted in that order until the path limit is
    reached, the remaining eligible ones are marked PATH_LIMIT_REACHED and ineligible ones PLAN_RESTRICTION.
    The result only depends on the policy and the ordered configs, never on their previous state.
    """
    updates = []
    admitted_count = 0

    for config in configs:
        if not is_eligible(policy, config):
            updates.append(MirrorConfigUpdate(id=config.id, active=False, status=MirrorConfigStatus.PLAN_RESTRICTION))
        elif admitted_count < policy.path_limit:
            updates.append(MirrorConfigUpdate(id=config.id, active=True, status=MirrorConfigStatus.ACTIVE))
            admitted_count += 1
        else:
            updates.append(
                MirrorConfigUpdate(id=config.id, active=False, status=MirrorConfigStatus.PATH_LIMIT_REACHED)
            )

    return updates


class EntitlementService:
    @staticmethod
    def reconcile(db: Session, user_id: str, tier: Tier) -> None:
        """
        Recompute which of the user's mirror configs may run under the given tier.

        Reads and writes go through the given session, the caller commits. Running it again with the same tier
        and configs writes the same values.
        """
        store = Store(db)
        policy = TierService.get_policy(tier)
        configs = store.find_mirror_configs_by_user(user_id)

        if not configs:
            logger.debug(f"No mirror configs to reconcile for user {user_id}")
            return

        updates = compute_admissions(policy, configs)
        store.batch_update_mirror_configs(updates)

        active_count = sum(1 for u in updates if u.active)
        restricted = [u.id for u in updates if u.status == MirrorConfigStatus.PLAN_RESTRICTION]
        over_limit = [u.id for u in updates if u.status == MirrorConfigStatus.PATH_LIMIT_REACHED]
        logger.info(
            f"Reconciled user {user_id} on {tier.value}: {active_count}/{len(updates)} paths active "
            f"(limit {policy.path_limit})"
        )
        if over_limit:
            logger.warning(
                f"[Limit Reached] User {user_id} has reached their {tier.value} limit, blocked: {over_limit}"
            )
        if restricted:
            logger.info(f"User {user_id} has configs not allowed on {tier.value}: {restricted}")

    @staticmethod
    def reconcile_current_tier(user_id: str) -> None:
        """Re-run reconciliation for a user under the tier they currently hold."""
        try:
            with SessionLocal() as db:
                store = Store(db)
                user = store.find_user(user_id, for_update=True)
                if user is None:
                    raise UserNotFound(f"User {user_id} not found")

                EntitlementService.reconcile(db, user_id, user.tier)
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error reconciling user {user_id}: {str(e)}", exc_info=True)
            raise StoreTransactionFailed(f"Error reconciling user {user_id}")

    @staticmethod
    def get_entitlements(user_id: str) -> EntitlementSummary:
        """Current tier and per-config admission state of a user. Raises UserNotFound."""
        with SessionLocal() as db:
            store = Store(db)
            user = store.find_user(user_id)
            if user is None:
                raise UserNotFound(f"User {user_id} not found")

            configs = store.find_mirror_configs_by_user(user_id)
            policy = TierService.get_policy(user.tier)

            return EntitlementSummary(
                user_id=user.id,
                tier=user.tier,
                tier_expires_at=user.tier_expires_at,
                path_limit=policy.path_limit,
                policy_version=TIER_POLICY_VERSION,
                active_count=sum(1 for c in configs if c.active),
                configs=[
                    MirrorConfigEntitlement(
                        id=c.id,
                        source_platform=c.source_platform,
                        destination_platform=c.destination_platform,
                        active=c.active,
                        status=c.status,
                        created_at=c.created_at,
                    )
                    for c in configs
                ],
            )

    @staticmethod
    def downgrade_expired_users() -> ExpiredTiersResponse:
        """
        Move users whose paid tier has expired back to FREE and reconcile their configs.

        Each user is handled in its own transaction, a failure on one doesn't roll the others back.
        """
        now = datetime.now()
        with SessionLocal() as db:
            expired_user_ids = [
                user_id
                for (user_id,) in db.query(User.id)
                .filter(
                    User.tier != Tier.FREE,
                    User.tier_expires_at.isnot(None),
                    User.tier_expires_at < now,
                )
                .order_by(User.id.asc())
                .all()
            ]

        downgraded = []
        for user_id in expired_user_ids:
            try:
                with SessionLocal() as db:
                    store = Store(db)
                    user = store.find_user(user_id, for_update=True)
                    # A payment may have renewed the tier since the scan
                    if user is None or not user.is_tier_expired or user.tier == Tier.FREE:
                        continue

                    previous_tier = user.tier
                    store.update_user(user_id, Tier.FREE, None)
                    EntitlementService.reconcile(db, user_id, Tier.FREE)
                    db.commit()
                    downgraded.append(user_id)
                    logger.info(f"User {user_id} downgraded from {previous_tier.value} to FREE after tier expiry")
            except SQLAlchemyError as e:
                logger.error(f"Error downgrading expired user {user_id}: {str(e)}", exc_info=True)

        return ExpiredTiersResponse(updated_count=len(downgraded), user_ids=downgraded)
