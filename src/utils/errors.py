"""Failures of a single payment notification, each mapped to the HTTP status returned to the gateway."""


class PaymentWebhookError(Exception):
    status_code = 500

    def __init__(self, message: str, *, order_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.order_id = order_id


class Unauthorized(PaymentWebhookError):
    """The webhook path secret doesn't match the configured one."""

    status_code = 403


class Forbidden(PaymentWebhookError):
    """The notification signature doesn't match the recomputed one."""

    status_code = 403


class MalformedNotification(PaymentWebhookError):
    status_code = 400


class MalformedOrderId(PaymentWebhookError):
    status_code = 400


class UnknownAmount(PaymentWebhookError):
    status_code = 400


class PaymentRecordNotFound(PaymentWebhookError):
    # The gateway retries on 5xx, the record should exist by then
    status_code = 500


class UserNotFound(PaymentWebhookError):
    status_code = 500


class StoreTransactionFailed(PaymentWebhookError):
    status_code = 500
