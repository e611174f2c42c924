"""Logging setup"""
import logging
from ticketdesk.infrastructure.config.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Attach a stream handler to the package logger once"""
    package_logger = logging.getLogger("ticketdesk")
    package_logger.setLevel(settings.get_log_level())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
