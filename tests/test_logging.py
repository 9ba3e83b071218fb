import importlib
import logging

import structlog

import core.logging
from core.logging import BusinessEvents
from payments.paypal_client import PayPalClient


class _TestLogger:
    def __init__(self):
        self.output = []

    def __call__(self, logger, method_name, event_dict):
        """Process log events and store them for test assertions"""
        self.output.append(event_dict.copy())
        return event_dict


def _configure(test_logger):
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            test_logger,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,  # Don't cache to ensure fresh config
    )


def test_credentials_configured_log(monkeypatch, credentials, mock_session):
    test_logger = _TestLogger()
    _configure(test_logger)
    monkeypatch.setattr(
        "payments.paypal_request.log",
        structlog.get_logger("payments.paypal_request"),
    )

    PayPalClient(credentials)

    events = [
        log
        for log in test_logger.output
        if log.get("event") == BusinessEvents.CREDENTIALS_CONFIGURED
    ]
    assert len(events) == 1

    entry = events[0]
    assert entry["mode"] == "sandbox"
    assert entry["currency"] == "USD"
    assert entry["level"] == "info"
    assert "timestamp" in entry
    # Credentials never reach the logs
    assert "sb_api_password" not in str(test_logger.output)
    assert "sb_api_signature" not in str(test_logger.output)


def test_request_logs(monkeypatch, paypal, mock_session):
    test_logger = _TestLogger()
    _configure(test_logger)
    monkeypatch.setattr(
        "payments.paypal_http_client.log",
        structlog.get_logger("payments.paypal_http_client"),
    )
    mock_session.post.return_value.text = "ACK=Success"

    paypal.do_paypal_request("GetBalance")

    sent = [
        log
        for log in test_logger.output
        if log.get("event") == BusinessEvents.REQUEST_SENT
    ]
    received = [
        log
        for log in test_logger.output
        if log.get("event") == BusinessEvents.RESPONSE_RECEIVED
    ]
    assert sent[0]["method"] == "GetBalance"
    assert sent[0]["url"] == "https://api-3t.sandbox.paypal.com/nvp"
    assert received[0]["size"] == len("ACK=Success")
    assert "sb_api_password" not in str(test_logger.output)


def test_import_leaves_host_logging_alone():
    root_logger = logging.getLogger()
    sentinel = logging.NullHandler()
    root_logger.addHandler(sentinel)
    try:
        importlib.reload(core.logging)
        assert sentinel in root_logger.handlers
    finally:
        root_logger.removeHandler(sentinel)
