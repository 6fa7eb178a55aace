"""
Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; this only installs the
root handler and level once at start-up.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger; safe to call more than once."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
    # Motor/pymongo heartbeat noise
    logging.getLogger("pymongo").setLevel(logging.WARNING)
