import hashlib

import pytest

from conftest import SERVER_KEY, WEBHOOK_SECRET, make_notification
from src.config import config
from src.interfaces.payment import MidtransNotification
from src.utils.errors import Forbidden, Unauthorized
from src.utils.signature import (
    authenticate_notification,
    get_notification_signature,
    verify_notification_signature,
    verify_path_secret,
)


def test_signature_is_sha512_of_ordered_fields():
    expected = hashlib.sha512(f"DISBOT-user123-1700000000000200199000.00{SERVER_KEY}".encode()).hexdigest()
    assert get_notification_signature("DISBOT-user123-1700000000000", "200", "199000.00", SERVER_KEY) == expected


def test_valid_notification_is_authentic():
    notification = MidtransNotification(**make_notification("DISBOT-user123-1700000000000"))
    authenticate_notification(WEBHOOK_SECRET, notification)


def test_wrong_path_secret_is_unauthorized():
    with pytest.raises(Unauthorized):
        verify_path_secret("not-the-secret")


def test_unset_path_secret_fails_closed(monkeypatch):
    monkeypatch.setattr(config, "MIDTRANS_WEBHOOK_SECRET", "")
    with pytest.raises(Unauthorized):
        verify_path_secret("")


def test_signature_from_another_server_key_is_forbidden():
    notification = MidtransNotification(**make_notification("DISBOT-user123-1", server_key="other-key"))
    with pytest.raises(Forbidden):
        verify_notification_signature(notification)


@pytest.mark.parametrize(
    "field,value", [("gross_amount", "499000.00"), ("status_code", "201"), ("order_id", "DISBOT-x-1")]
)
def test_tampered_signed_field_is_forbidden(field, value):
    payload = make_notification("DISBOT-user123-1")
    payload[field] = value
    with pytest.raises(Forbidden):
        verify_notification_signature(MidtransNotification(**payload))


def test_path_secret_checked_before_signature():
    notification = MidtransNotification(**make_notification("DISBOT-user123-1", server_key="other-key"))
    with pytest.raises(Unauthorized):
        authenticate_notification("wrong", notification)
