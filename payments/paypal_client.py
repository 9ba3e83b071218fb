from collections.abc import Mapping
from typing import Any

from core.settings import Settings
from payments.paypal_http_client import DEFAULT_TIMEOUT, PayPalHttpClient
from payments.paypal_request import PayPalRequest


class PayPalClient(PayPalRequest, PayPalHttpClient):
    """PayPal NVP/IPN client."""

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(timeout=timeout)
        self.set_config(config)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PayPalClient":
        """Build a client from explicit settings."""
        return cls(
            settings.paypal_credentials(),
            timeout=settings.PAYPAL_HTTP_TIMEOUT,
        )
