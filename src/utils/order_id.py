import time

from src.config import config
from src.interfaces.payment import DecodedOrderId
from src.utils.errors import MalformedOrderId

ORDER_ID_DELIMITER = "-"


def encode_order_id(user_id: str, timestamp: int | None = None, prefix: str | None = None) -> str:
    """Build "{prefix}-{user_id}-{epoch millis}", the order id sent to the gateway."""
    prefix = prefix if prefix is not None else config.ORDER_ID_PREFIX
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return ORDER_ID_DELIMITER.join([prefix, user_id, str(timestamp)])


def decode_order_id(order_id: str, prefix: str | None = None) -> DecodedOrderId:
    """
    Extract the owning user and the timestamp from an order id.

    User ids may themselves contain the delimiter, so everything between the product marker and the last
    segment is the user id.
    """
    prefix = prefix if prefix is not None else config.ORDER_ID_PREFIX
    parts = order_id.split(ORDER_ID_DELIMITER)

    if len(parts) < 3 or parts[0] != prefix:
        raise MalformedOrderId(f"Invalid order id format: {order_id}", order_id=order_id)

    user_id = ORDER_ID_DELIMITER.join(parts[1:-1])
    if not user_id:
        raise MalformedOrderId(f"Missing user id in order id: {order_id}", order_id=order_id)

    return DecodedOrderId(user_id=user_id, timestamp=parts[-1])
