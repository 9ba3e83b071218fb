"""
PayPal Request Configuration

This module holds the request setup state shared by every PayPal API call:
- API environment selection (sandbox / live)
- Provider configuration copied from the credential structure
- Currency validation against PayPal's supported currencies
- Staging of the outbound request payload
- Parsing of NVP responses and IPN verification
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl

import structlog

from core.logging import BusinessEvents
from payments.exceptions import (
    ConfigurationError,
    InvalidProviderError,
    UnsupportedCurrencyError,
)
from payments.paypal_http_client import PayPalHttpClient

log = structlog.get_logger(__name__)

API_MODES = ("sandbox", "live")
DEFAULT_MODE = "live"
DEFAULT_CURRENCY = "USD"

ALLOWED_CURRENCIES = (
    "AUD",
    "BRL",
    "CAD",
    "CZK",
    "DKK",
    "EUR",
    "HKD",
    "HUF",
    "ILS",
    "INR",
    "JPY",
    "MYR",
    "MXN",
    "NOK",
    "NZD",
    "PHP",
    "PLN",
    "GBP",
    "SGD",
    "SEK",
    "CHF",
    "TWD",
    "THB",
    "USD",
    "RUB",
)


class PayPalRequest:
    """Request setup state for a PayPal API client.

    Must be combined with PayPalHttpClient (see PayPalClient); on its own
    set_api_credentials fails with InvalidProviderError.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.mode: str | None = None
        self.currency: str | None = None
        self.config: dict[str, Any] = {}
        self.options: dict[str, Any] = {}
        self.payment_action: Any = None
        self.locale: Any = None
        self.validate_ssl: Any = None
        self.post: dict[str, Any] = {}
        self.api_url: str | None = None

    def set_api_credentials(self, credentials: Mapping[str, Any]) -> None:
        """
        Set PayPal API credentials.

        Everything is validated before any state changes, so a failed call
        leaves the previous configuration in place.

        Raises:
            ConfigurationError: no usable sub-map for the selected mode
            InvalidProviderError: self is not a PayPal HTTP client
            UnsupportedCurrencyError: currency outside the allow-list
        """
        mode = self._resolve_api_environment(credentials)
        provider = self._resolve_provider_configuration(credentials, mode)
        currency = credentials.get("currency", DEFAULT_CURRENCY)
        self._check_currency(currency)

        self.mode = mode
        self._set_api_provider_configuration(credentials, provider)
        self.currency = currency
        self.set_http_client_configuration()

        log.info(
            BusinessEvents.CREDENTIALS_CONFIGURED,
            mode=self.mode,
            currency=self.currency,
            payment_action=self.payment_action,
            locale=self.locale,
        )

    def add_options(self, options: Mapping[str, Any]) -> "PayPalRequest":
        """Set other/override PayPal API parameters. Replaces earlier options."""
        self.options = options
        return self

    def set_currency(self, currency: str = DEFAULT_CURRENCY) -> "PayPalRequest":
        self._check_currency(currency)
        self.currency = currency
        return self

    def verify_ipn(self, post: Mapping[str, Any]):
        """Post an IPN message back to PayPal and return its raw verdict."""
        ipn_url = self._require_config("ipn_url")
        self.set_request_data(post)
        self.api_url = ipn_url

        log.info(BusinessEvents.IPN_VERIFY, mode=self.mode, fields=len(self.post))
        return self.do_paypal_request("verifyipn")

    def set_request_data(self, data: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Stage the payload for the next request, discarding the previous one."""
        self.post = dict(data) if data else {}

        log.debug(BusinessEvents.REQUEST_STAGED, fields=list(self.post))
        return self.post

    def set_config(self, config: Mapping[str, Any] | None = None) -> None:
        if config:
            self.set_api_credentials(config)

        self.set_request_data()

    def set_default_values(self) -> None:
        if not self.payment_action:
            self.payment_action = "Sale"

        if not self.locale:
            self.locale = "en_US"

        if not self.validate_ssl:
            self.validate_ssl = False

    def set_api_provider(self, credentials: Mapping[str, Any]) -> None:
        """Hand provider options to the HTTP client capability."""
        if isinstance(self, PayPalHttpClient):
            self.set_options(credentials)
            return

        raise InvalidProviderError(
            "Invalid api credentials provided for PayPal!. "
            "Please provide the right api credentials."
        )

    @staticmethod
    def retrieve_data(method: str, response):
        """Parse a PayPal NVP response. IPN verdicts are returned untouched."""
        if method == "verifyipn":
            return response

        if isinstance(response, bytes):
            response = response.decode("utf-8", errors="replace")

        return dict(parse_qsl(response, keep_blank_values=True))

    def _require_config(self, key: str):
        value = self.config.get(key)
        if not value:
            raise ConfigurationError(
                "PayPal client is not configured; call set_api_credentials() first"
            )
        return value

    @staticmethod
    def _check_currency(currency) -> None:
        if currency not in ALLOWED_CURRENCIES:
            raise UnsupportedCurrencyError(
                f"Currency is not supported by PayPal: {currency!r}"
            )

    @staticmethod
    def _resolve_api_environment(credentials: Mapping[str, Any]) -> str:
        mode = credentials.get("mode")
        return mode if mode in API_MODES else DEFAULT_MODE

    @staticmethod
    def _resolve_provider_configuration(
        credentials: Mapping[str, Any], mode: str
    ) -> dict[str, Any]:
        provider = credentials.get(mode)
        if provider is None:
            raise ConfigurationError(f"No PayPal credentials configured for mode {mode!r}")
        if not isinstance(provider, Mapping):
            raise ConfigurationError(
                f"PayPal credentials for mode {mode!r} must be a mapping, "
                f"got {type(provider).__name__}"
            )
        return dict(provider)

    def _set_api_provider_configuration(
        self, credentials: Mapping[str, Any], provider: dict[str, Any]
    ) -> None:
        self.config = provider

        self.payment_action = credentials.get("payment_action")
        self.locale = credentials.get("locale")
        self.validate_ssl = credentials.get("validate_ssl")

        self.set_api_provider(credentials)
