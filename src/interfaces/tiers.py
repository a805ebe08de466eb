import enum

from pydantic import BaseModel, ConfigDict


class Tier(str, enum.Enum):
    FREE = "FREE"
    STARTER = "STARTER"
    PRO = "PRO"
    ELITE = "ELITE"


class Platform(str, enum.Enum):
    DISCORD = "DISCORD"
    TELEGRAM = "TELEGRAM"


class TierPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    path_limit: int
    permitted_sources: frozenset[Platform]
    permitted_destinations: frozenset[Platform]


class TierCatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    tier: Tier
    price: int  # Whole IDR
    price_label: str
    normal_price: int | None = None
    label: str | None = None
    features: tuple[str, ...] = ()
