# legacy_orders/utils/logging.py
import logging
import sys

from legacy_orders.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def configure_logging(level: str | None = None) -> None:
    """Jeden handler na stdout dla calego pakietu, wywolywane raz."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("legacy_orders")
    root.addHandler(handler)
    root.setLevel((level or LOG_LEVEL).upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
