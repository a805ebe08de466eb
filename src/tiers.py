from src.interfaces.tiers import Platform, Tier, TierCatalogEntry, TierPolicy

# Bump whenever a limit, platform set or price below changes
TIER_POLICY_VERSION = 1

# Stands in for "no limit", never the binding constraint in practice
UNLIMITED_PATHS = 9999

_DISCORD_ONLY = frozenset({Platform.DISCORD})
_ALL_PLATFORMS = frozenset({Platform.DISCORD, Platform.TELEGRAM})

TIER_POLICIES: dict[Tier, TierPolicy] = {
    Tier.FREE: TierPolicy(path_limit=1, permitted_sources=_DISCORD_ONLY, permitted_destinations=_DISCORD_ONLY),
    Tier.STARTER: TierPolicy(path_limit=2, permitted_sources=_DISCORD_ONLY, permitted_destinations=_DISCORD_ONLY),
    Tier.PRO: TierPolicy(path_limit=15, permitted_sources=_ALL_PLATFORMS, permitted_destinations=_ALL_PLATFORMS),
    Tier.ELITE: TierPolicy(
        path_limit=UNLIMITED_PATHS, permitted_sources=_ALL_PLATFORMS, permitted_destinations=_ALL_PLATFORMS
    ),
}

# Exact gateway amounts (whole IDR) charged for each tier
PRICE_TABLE: dict[int, Tier] = {
    75000: Tier.STARTER,
    199000: Tier.PRO,
    499000: Tier.ELITE,
}

TIER_CATALOG: list[TierCatalogEntry] = [
    TierCatalogEntry(
        tier=Tier.STARTER,
        price=75000,
        price_label="Rp 75.000",
        normal_price=99000,
        features=("2 Mirror Paths", "Discord Only"),
    ),
    TierCatalogEntry(
        tier=Tier.PRO,
        price=199000,
        price_label="Rp 199.000",
        features=("15 Mirror Paths", "Discord + Telegram", "Custom Watermark"),
    ),
    TierCatalogEntry(
        tier=Tier.ELITE,
        price=499000,
        price_label="Rp 499.000",
        normal_price=749000,
        label="FLASH SALE",
        features=("Unlimited Mirror Paths", "Smart Custom Blur", "Ghost Mirroring (MTProto)", "Custom Watermark"),
    ),
]
