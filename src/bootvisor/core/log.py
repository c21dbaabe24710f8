"""
log.py
- Configures the shared loguru logger for the entrypoint.
- All log lines go to stdout with a UTC timestamp, so `docker logs` shows them in order.
"""

import sys
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DDTHH:mm:ss!UTC}Z</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def configure_logging(debug=False, sink=sys.stdout):
    logger.remove()
    logger.add(
        sink,
        level="DEBUG" if debug else "INFO",
        colorize=sink is sys.stdout and sys.stdout.isatty(),
        format=LOG_FORMAT,
    )
