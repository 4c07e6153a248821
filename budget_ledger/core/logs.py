"""Root logging setup shared by the API process and the operator scripts."""

import logging
import time

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


class UTCFormatter(logging.Formatter):
    """Timestamps in UTC, matching the trailing Z in LOG_DATEFMT."""

    converter = time.gmtime


def configure_logging(level: str | int = logging.INFO) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(UTCFormatter(LOG_FORMAT, LOG_DATEFMT))
    logging.basicConfig(level=level, handlers=[handler])
