import pytest

from src.utils.errors import MalformedOrderId
from src.utils.order_id import decode_order_id, encode_order_id


def test_decode_order_id():
    decoded = decode_order_id("PFX-user123-1690000000000", prefix="PFX")
    assert decoded.user_id == "user123"
    assert decoded.timestamp == "1690000000000"


def test_decode_keeps_delimiters_inside_user_id():
    decoded = decode_order_id("DISBOT-clh-123-45-1681234567890")
    assert decoded.user_id == "clh-123-45"
    assert decoded.timestamp == "1681234567890"


def test_decode_rejects_other_product_marker():
    with pytest.raises(MalformedOrderId):
        decode_order_id("OTHER-user123-1690000000000", prefix="PFX")


@pytest.mark.parametrize("order_id", ["DISBOT-1690000000000", "DISBOT", "", "DISBOT--1690000000000"])
def test_decode_rejects_missing_segments(order_id):
    with pytest.raises(MalformedOrderId):
        decode_order_id(order_id)


def test_encode_uses_configured_prefix():
    order_id = encode_order_id("user-42", timestamp=1700000000000)
    assert order_id == "DISBOT-user-42-1700000000000"
    assert decode_order_id(order_id).user_id == "user-42"


def test_encode_defaults_to_current_millis():
    timestamp = decode_order_id(encode_order_id("user123")).timestamp
    assert timestamp.isdigit()
    assert len(timestamp) == 13
