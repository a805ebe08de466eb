import enum
from datetime import datetime

from pydantic import BaseModel

from src.interfaces.tiers import Platform, Tier


class MirrorConfigStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PLAN_RESTRICTION = "PLAN_RESTRICTION"
    PATH_LIMIT_REACHED = "PATH_LIMIT_REACHED"


class MirrorConfigUpdate(BaseModel):
    id: str
    active: bool
    status: MirrorConfigStatus


class MirrorConfigEntitlement(BaseModel):
    id: str
    source_platform: Platform
    destination_platform: Platform | None
    active: bool
    status: MirrorConfigStatus
    created_at: datetime


class EntitlementSummary(BaseModel):
    user_id: str
    tier: Tier
    tier_expires_at: datetime | None
    path_limit: int
    policy_version: int
    active_count: int
    configs: list[MirrorConfigEntitlement]


class ExpiredTiersResponse(BaseModel):
    updated_count: int
    user_ids: list[str]
