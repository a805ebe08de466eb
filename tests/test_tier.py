from decimal import Decimal

import pytest

from src.interfaces.tiers import Tier, TierCatalogEntry
from src.services import tier as tier_service
from src.services.tier import TierService, to_minor_units
from src.tiers import TIER_POLICIES, UNLIMITED_PATHS
from src.utils.errors import UnknownAmount


@pytest.mark.parametrize(
    "amount,tier",
    [("75000.00", Tier.STARTER), ("75000", Tier.STARTER), ("199000.0", Tier.PRO), (499000, Tier.ELITE)],
)
def test_resolve_known_prices(amount, tier):
    assert TierService.resolve(amount) == tier


@pytest.mark.parametrize(
    "amount", ["75000.01", "1", "0", "-75000", "74999.999", "75000.000000000000000000000000001", "1E+30"]
)
def test_resolve_rejects_unknown_amounts(amount):
    with pytest.raises(UnknownAmount):
        TierService.resolve(amount)


@pytest.mark.parametrize("amount", ["abc", "", "NaN", "Infinity", "1E+999999"])
def test_resolve_rejects_non_numeric_amounts(amount):
    with pytest.raises(UnknownAmount):
        TierService.resolve(amount)


def test_resolve_falls_back_to_catalog(monkeypatch):
    monkeypatch.setattr(tier_service, "PRICE_TABLE", {})
    monkeypatch.setattr(
        tier_service, "TIER_CATALOG", [TierCatalogEntry(tier=Tier.PRO, price=149000, price_label="Rp 149.000")]
    )
    assert TierService.resolve("149000.00") == Tier.PRO


def test_to_minor_units():
    assert to_minor_units("75000.00") == 7500000
    assert to_minor_units(Decimal("0.5")) == 50
    with pytest.raises(UnknownAmount):
        to_minor_units("0.001")


def test_to_minor_units_accepts_trailing_zeros_beyond_precision():
    assert to_minor_units("75000." + "0" * 40) == 7500000


def test_price_for_tier():
    assert TierService.price_for_tier(Tier.PRO) == 199000
    with pytest.raises(ValueError):
        TierService.price_for_tier(Tier.FREE)


def test_every_tier_has_a_policy():
    assert set(TIER_POLICIES) == set(Tier)
    assert TierService.get_policy(Tier.ELITE).path_limit == UNLIMITED_PATHS
    assert TierService.get_policy(Tier.STARTER).path_limit == 2
