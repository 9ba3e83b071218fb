import logging
import sys
import structlog
import os
from opentelemetry.instrumentation.logging import LoggingInstrumentor


def get_log_level():
    """Get log level from environment or default to INFO"""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_renderer():
    """Get log renderer based on environment"""
    env = os.getenv("ENVIRONMENT", "development")
    # JSON lines for tests and production
    if env in ["test", "production"]:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging():
    """
    Set up structlog + OTEL context injection for an application.

    Replaces the root logger's handlers, so only entry points (scripts, test
    setup) call this. Importing the client never touches logging config.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.ExceptionPrettyPrinter(),
            get_log_renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    env = os.getenv("ENVIRONMENT", "development")
    if env == "test":
        # In test mode, write to stdout for easier capture
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(get_log_level())

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    LoggingInstrumentor().instrument(set_logging_format=False)


# Business Event Log Names
class BusinessEvents:
    """Standard names for PayPal client event logs"""

    CREDENTIALS_CONFIGURED = "paypal.credentials.configured"
    REQUEST_SENT = "paypal.request.sent"
    REQUEST_STAGED = "paypal.request.staged"
    RESPONSE_RECEIVED = "paypal.response.received"
    IPN_VERIFY = "paypal.ipn.verify"
