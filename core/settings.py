from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """PayPal client settings loaded from environment variables."""

    # Environment selection ("sandbox" or "live")
    PAYPAL_MODE: str = "live"

    # Sandbox API credentials
    PAYPAL_SANDBOX_USERNAME: str = ""
    PAYPAL_SANDBOX_PASSWORD: str = ""
    PAYPAL_SANDBOX_SECRET: str = ""
    PAYPAL_SANDBOX_CERTIFICATE: str = ""
    PAYPAL_SANDBOX_APP_ID: str = "APP-80W284485P519543T"

    # Live API credentials
    PAYPAL_LIVE_USERNAME: str = ""
    PAYPAL_LIVE_PASSWORD: str = ""
    PAYPAL_LIVE_SECRET: str = ""
    PAYPAL_LIVE_CERTIFICATE: str = ""
    PAYPAL_LIVE_APP_ID: str = ""

    # Request defaults
    PAYPAL_PAYMENT_ACTION: str = "Sale"
    PAYPAL_CURRENCY: str = "USD"
    PAYPAL_BILLING_TYPE: str = "MerchantInitiatedBilling"
    PAYPAL_NOTIFY_URL: str = ""
    PAYPAL_LOCALE: str = ""
    PAYPAL_VALIDATE_SSL: bool = True

    # HTTP transport
    PAYPAL_HTTP_TIMEOUT: float = 30.0

    # App settings
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)

    def paypal_credentials(self) -> dict[str, Any]:
        """Build the credential structure consumed by PayPalClient."""
        return {
            "mode": self.PAYPAL_MODE,
            "sandbox": {
                "username": self.PAYPAL_SANDBOX_USERNAME,
                "password": self.PAYPAL_SANDBOX_PASSWORD,
                "secret": self.PAYPAL_SANDBOX_SECRET,
                "certificate": self.PAYPAL_SANDBOX_CERTIFICATE,
                "app_id": self.PAYPAL_SANDBOX_APP_ID,
            },
            "live": {
                "username": self.PAYPAL_LIVE_USERNAME,
                "password": self.PAYPAL_LIVE_PASSWORD,
                "secret": self.PAYPAL_LIVE_SECRET,
                "certificate": self.PAYPAL_LIVE_CERTIFICATE,
                "app_id": self.PAYPAL_LIVE_APP_ID,
            },
            "payment_action": self.PAYPAL_PAYMENT_ACTION,
            "currency": self.PAYPAL_CURRENCY,
            "billing_type": self.PAYPAL_BILLING_TYPE,
            "notify_url": self.PAYPAL_NOTIFY_URL,
            "locale": self.PAYPAL_LOCALE,
            "validate_ssl": self.PAYPAL_VALIDATE_SSL,
        }
