"""Test configuration and fixtures."""

import os
from unittest.mock import MagicMock, patch

import pytest

from core.logging import configure_logging
from payments.paypal_client import PayPalClient


@pytest.fixture(scope="session", autouse=True)
def setup_logging():
    """Configure structlog once for the test run."""
    configure_logging()


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    # Store original env vars
    original_env = dict(os.environ)

    os.environ.update(
        {
            "ENVIRONMENT": "test",
            "PAYPAL_MODE": "sandbox",
            "PAYPAL_SANDBOX_USERNAME": "sb_api_user",
            "PAYPAL_SANDBOX_PASSWORD": "sb_api_password",
            "PAYPAL_SANDBOX_SECRET": "sb_api_signature",
            "PAYPAL_LIVE_USERNAME": "live_api_user",
            "PAYPAL_LIVE_PASSWORD": "live_api_password",
            "PAYPAL_LIVE_SECRET": "live_api_signature",
            "PAYPAL_CURRENCY": "EUR",
            "PAYPAL_NOTIFY_URL": "https://shop.example/paypal/ipn",
        }
    )

    yield

    # Restore original env vars
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def credentials():
    return {
        "mode": "sandbox",
        "sandbox": {
            "username": "sb_api_user",
            "password": "sb_api_password",
            "secret": "sb_api_signature",
            "certificate": "",
            "app_id": "APP-80W284485P519543T",
        },
        "live": {
            "username": "live_api_user",
            "password": "live_api_password",
            "secret": "live_api_signature",
            "certificate": "",
            "app_id": "",
        },
        "payment_action": "Sale",
        "currency": "USD",
        "billing_type": "MerchantInitiatedBilling",
        "notify_url": "https://shop.example/paypal/ipn",
        "locale": "en_GB",
        "validate_ssl": True,
    }


@pytest.fixture
def mock_session():
    """Patch requests.Session used by the HTTP client."""
    with patch("payments.paypal_http_client.requests.Session") as session_cls:
        session = MagicMock()
        session.headers = {}
        session_cls.return_value = session
        yield session


@pytest.fixture
def paypal(credentials, mock_session):
    return PayPalClient(credentials)
