from payments.exceptions import (
    ConfigurationError,
    InvalidProviderError,
    PayPalError,
    UnsupportedCurrencyError,
)
from payments.paypal_client import PayPalClient

__all__ = [
    "ConfigurationError",
    "InvalidProviderError",
    "PayPalClient",
    "PayPalError",
    "UnsupportedCurrencyError",
]
