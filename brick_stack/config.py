# brick_stack/config.py
"""
Settlement configuration and logging setup.
"""

import logging
from dataclasses import dataclass
from typing import Union


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class SettleConfig:
    """Options for a settlement run."""

    # Reject bricks whose endpoints differ in more than one axis
    validate_geometry: bool = True

    # Height of bare ground; the lowest resting z is ground_height + 1
    ground_height: int = 0

    # Keep the per-column height history on the Surface
    record_history: bool = False

    # Default level for configure_logging()
    log_level: str = "WARNING"


# Global config instance
CONFIG = SettleConfig()


def configure_logging(level: Union[str, int, None] = None) -> None:
    """Attach a stream handler to the brick_stack logger at `level`."""
    if level is None:
        level = CONFIG.log_level
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger("brick_stack")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
