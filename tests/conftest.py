import os
import tempfile
from datetime import datetime, timedelta

import pytest

# Configuration is read once at import time, point it at a throwaway database first
_db_dir = tempfile.mkdtemp(prefix="disbot-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["MIDTRANS_SERVER_KEY"] = "SB-Mid-server-test-key"
os.environ["MIDTRANS_WEBHOOK_SECRET"] = "webhook-path-secret"
os.environ["ORDER_ID_PREFIX"] = "DISBOT"
os.environ["ADMIN_SECRET"] = "admin-secret"
os.environ["TIER_DURATION_DAYS"] = "30"

from src.interfaces.mirror import MirrorConfigStatus  # noqa: E402
from src.interfaces.payment import PaymentStatus  # noqa: E402
from src.interfaces.tiers import Platform, Tier  # noqa: E402
from src.models import Base, MirrorConfig, PaymentHistory, User  # noqa: E402
from src.models.base import SessionLocal, engine  # noqa: E402
from src.utils.signature import get_notification_signature  # noqa: E402

SERVER_KEY = os.environ["MIDTRANS_SERVER_KEY"]
WEBHOOK_SECRET = os.environ["MIDTRANS_WEBHOOK_SECRET"]
ADMIN_SECRET = os.environ["ADMIN_SECRET"]


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def create_user():
    def _create_user(user_id: str = "user123", tier: Tier = Tier.FREE, tier_expires_at: datetime | None = None) -> str:
        with SessionLocal() as db:
            db.add(User(id=user_id, tier=tier, tier_expires_at=tier_expires_at))
            db.commit()
        return user_id

    return _create_user


@pytest.fixture
def create_configs():
    """Create mirror configs one minute apart, in the given order. Returns their ids."""

    def _create_configs(user_id: str, config_attrs: list[dict], start: datetime | None = None) -> list[str]:
        start = start or datetime(2026, 1, 1, 12, 0, 0)
        ids = []
        with SessionLocal() as db:
            for index, attrs in enumerate(config_attrs):
                config = MirrorConfig(
                    user_id=user_id,
                    source_platform=attrs.get("source_platform", Platform.DISCORD),
                    source_channel_id=attrs.get("source_channel_id", f"channel-{index}"),
                    telegram_chat_id=attrs.get("telegram_chat_id"),
                    active=attrs.get("active", True),
                    status=attrs.get("status", MirrorConfigStatus.ACTIVE),
                    created_at=attrs.get("created_at", start + timedelta(minutes=index)),
                    id=attrs.get("id"),
                )
                db.add(config)
                ids.append(config.id)
            db.commit()
        return ids

    return _create_configs


@pytest.fixture
def create_payment():
    def _create_payment(
        order_id: str, user_id: str, amount: int, tier: Tier, status: PaymentStatus = PaymentStatus.pending
    ) -> str:
        with SessionLocal() as db:
            db.add(PaymentHistory(order_id=order_id, user_id=user_id, amount=amount, tier=tier, status=status))
            db.commit()
        return order_id

    return _create_payment


def load_configs(user_id: str) -> dict[str, tuple[bool, MirrorConfigStatus]]:
    with SessionLocal() as db:
        configs = db.query(MirrorConfig).filter(MirrorConfig.user_id == user_id).all()
        return {c.id: (c.active, c.status) for c in configs}


def load_user(user_id: str) -> User | None:
    with SessionLocal() as db:
        user = db.query(User).filter(User.id == user_id).first()
        if user is not None:
            db.expunge(user)
        return user


def load_payment_status(order_id: str) -> PaymentStatus | None:
    with SessionLocal() as db:
        payment = db.query(PaymentHistory).filter(PaymentHistory.order_id == order_id).first()
        return payment.status if payment else None


def make_notification(
    order_id: str,
    transaction_status: str = "settlement",
    gross_amount: str = "75000.00",
    fraud_status: str | None = "accept",
    status_code: str = "200",
    server_key: str = SERVER_KEY,
) -> dict:
    return {
        "order_id": order_id,
        "transaction_status": transaction_status,
        "fraud_status": fraud_status,
        "gross_amount": gross_amount,
        "status_code": status_code,
        "signature_key": get_notification_signature(order_id, status_code, gross_amount, server_key),
    }
