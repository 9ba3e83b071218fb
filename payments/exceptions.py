"""
PayPal client errors

Everything raised by the request configuration layer derives from PayPalError.
Transport failures are raised by requests and are not wrapped.
"""


class PayPalError(Exception):
    pass


class ConfigurationError(PayPalError):
    """Credentials are missing the sub-map for the selected mode, or it is malformed."""


class UnsupportedCurrencyError(PayPalError):
    """Currency code is not in the PayPal allow-list."""


class InvalidProviderError(PayPalError):
    """The configured object cannot act as a PayPal HTTP client."""
