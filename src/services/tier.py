from decimal import Decimal, DecimalException, Inexact, localcontext

from src.interfaces.tiers import Tier, TierPolicy
from src.tiers import PRICE_TABLE, TIER_CATALOG, TIER_POLICIES
from src.utils.errors import UnknownAmount
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

MINOR_UNITS_PER_UNIT = 100
# Far above any price, keeps int() conversion of absurd exponents out of reach
MAX_MINOR_UNITS_DIGITS = 18


def to_minor_units(amount: str | int | Decimal) -> int:
    """
    Convert a gateway amount ("75000.00", 75000...) to integer minor units.

    Amounts that aren't numbers or that carry more precision than a minor unit are rejected instead of rounded,
    so formatting drift can never select another tier.
    """
    try:
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            value = Decimal(str(amount).strip())
            if not value.is_finite():
                raise UnknownAmount(f"Invalid amount: {amount}")

            minor = value * MINOR_UNITS_PER_UNIT
            if minor != minor.to_integral_value():
                raise UnknownAmount(f"Amount {amount} is not a whole number of minor units")
            if minor.adjusted() >= MAX_MINOR_UNITS_DIGITS:
                raise UnknownAmount(f"Amount {amount} is out of range")
    except DecimalException:
        raise UnknownAmount(f"Invalid amount: {amount}")

    return int(minor)


class TierService:
    @staticmethod
    def resolve(amount: str | int | Decimal) -> Tier:
        """
        Map a paid amount to the tier it buys.

        Looks the exact amount up in the price table first, then in the extended catalog.
        Raises UnknownAmount when neither has it.
        """
        minor = to_minor_units(amount)

        for price, tier in PRICE_TABLE.items():
            if price * MINOR_UNITS_PER_UNIT == minor:
                return tier

        # Catalog prices may be updated before the price table is
        for entry in TIER_CATALOG:
            if entry.price * MINOR_UNITS_PER_UNIT == minor:
                logger.info(f"Amount {amount} resolved to {entry.tier.value} from the tier catalog")
                return entry.tier

        logger.warning(f"Unknown price amount: {amount}")
        raise UnknownAmount(f"Unknown price amount: {amount}")

    @staticmethod
    def price_for_tier(tier: Tier) -> int:
        """Whole-unit price charged for a tier. Raises ValueError for tiers that can't be bought."""
        for price, priced_tier in PRICE_TABLE.items():
            if priced_tier == tier:
                return price
        raise ValueError(f"Tier {tier.value} has no price")

    @staticmethod
    def get_policy(tier: Tier) -> TierPolicy:
        return TIER_POLICIES[tier]
