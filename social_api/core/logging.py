"""Logging setup shared by the API process, scripts and the Celery worker."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL echo is controlled by DEBUG on the engine; keep the pool quiet.
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
