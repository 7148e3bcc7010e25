import logging
import sys
import time

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "account-activation"


class UTCJsonFormatter(JsonFormatter):
    converter = time.gmtime


def setup_logging(level: str = "INFO", *, env: str = "dev") -> None:
    """Route every logger to stdout as one JSON object per line."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        UTCJsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            static_fields={"service": SERVICE_NAME, "env": env},
        )
    )
    root.addHandler(handler)

    # third-party chatter stays at WARNING unless something breaks
    for noisy in ("httpx", "httpcore", "psycopg.pool"):
        logging.getLogger(noisy).setLevel("WARNING")
