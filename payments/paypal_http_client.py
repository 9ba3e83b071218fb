"""
PayPal HTTP Client

Transport side of the PayPal client: per-environment endpoints, the requests
session, NVP payload assembly and posting. Mixed into PayPalClient together
with PayPalRequest, whose state (mode, config, options, post) it reads.
"""

from typing import Any

import requests
import structlog

from core.logging import BusinessEvents
from payments.exceptions import ConfigurationError

log = structlog.get_logger(__name__)

NVP_API_VERSION = 123
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "PayPal-Request-Client/1.0"

API_ENDPOINTS = {
    "sandbox": {
        "api_url": "https://api-3t.sandbox.paypal.com/nvp",
        "certificate_api_url": "https://api.sandbox.paypal.com/nvp",
        "gateway_url": "https://www.sandbox.paypal.com",
        "ipn_url": "https://ipnpb.sandbox.paypal.com/cgi-bin/webscr",
    },
    "live": {
        "api_url": "https://api-3t.paypal.com/nvp",
        "certificate_api_url": "https://api.paypal.com/nvp",
        "gateway_url": "https://www.paypal.com",
        "ipn_url": "https://ipnpb.paypal.com/cgi-bin/webscr",
    },
}


class PayPalHttpClient:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.client: requests.Session | None = None
        self.http_client_config: dict[str, Any] = {}
        self.http_body_param = "data"
        self.timeout = timeout

    def set_options(self, credentials) -> None:
        """Set endpoints and request defaults for the selected mode."""
        endpoints = API_ENDPOINTS[self.mode]

        # Certificate authentication lives on different servers
        if self.config.get("certificate"):
            self.config["api_url"] = endpoints["certificate_api_url"]
        else:
            self.config["api_url"] = endpoints["api_url"]

        self.config["gateway_url"] = endpoints["gateway_url"]
        self.config["ipn_url"] = endpoints["ipn_url"]

        self.config["payment_action"] = credentials.get("payment_action")
        self.config["notify_url"] = credentials.get("notify_url")
        self.config["billing_type"] = credentials.get("billing_type")
        self.config["locale"] = credentials.get("locale")

        self.api_url = self.config["api_url"]

    def set_http_client_configuration(self) -> None:
        self.http_client_config = {
            "verify": bool(self.validate_ssl),
            "timeout": self.timeout,
        }
        if self.config.get("certificate"):
            self.http_client_config["cert"] = self.config["certificate"]

        self.client = self._create_http_client()
        self.set_default_values()

    def _create_http_client(self) -> requests.Session:
        session = requests.Session()
        session.verify = self.http_client_config["verify"]
        if "cert" in self.http_client_config:
            session.cert = self.http_client_config["cert"]
        session.headers.update({"User-Agent": USER_AGENT})
        return session

    def create_request_payload(self, method: str) -> dict[str, Any]:
        """Merge credentials and options over the staged request data."""
        # IPN messages go back to PayPal exactly as received
        if method == "verifyipn":
            return dict(self.post)

        payload = dict(self.post)
        payload.update(
            {
                "USER": self.config.get("username"),
                "PWD": self.config.get("password"),
                "SIGNATURE": self.config.get("secret"),
                "VERSION": NVP_API_VERSION,
                "METHOD": method,
            }
        )
        payload.update(self.options)
        self.post = payload
        return payload

    def send_request(self, endpoint: str, payload, headers=None) -> str:
        """POST the payload and return the raw response body."""
        if self.client is None:
            raise ConfigurationError(
                "PayPal HTTP client is not configured; call set_api_credentials() first"
            )

        response = self.client.post(
            endpoint,
            headers=headers,
            timeout=self.http_client_config.get("timeout", self.timeout),
            **{self.http_body_param: payload},
        )
        response.raise_for_status()
        return response.text

    def do_paypal_request(self, method: str):
        if method != "verifyipn":
            self.api_url = self._require_config("api_url")

        payload = self.create_request_payload(method)

        log.info(BusinessEvents.REQUEST_SENT, method=method, url=self.api_url)
        body = self.send_request(self.api_url, payload)
        log.info(BusinessEvents.RESPONSE_RECEIVED, method=method, size=len(body))

        # Payload is consumed once sent
        self.set_request_data()

        return self.retrieve_data(method, body)
