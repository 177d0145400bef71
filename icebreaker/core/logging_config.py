# icebreaker/core/logging_config.py
import logging

from icebreaker.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once, at application startup."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo is far too noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
