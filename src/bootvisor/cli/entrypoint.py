#!/usr/bin/env python3
"""
entrypoint.py
- Container ENTRYPOINT. Everything after the program name is the final workload command.
- Usage:
    ENTRYPOINT ["bootvisor"]
    CMD ["mysqld", "--user=mysql"]

- Exit code: the workload's own exit code, 1 if an init script failed, 2 on bad configuration.
"""

import sys

import sentry_sdk
from loguru import logger

from bootvisor.core.config import DEBUG, SENTRY_DSN, load_config
from bootvisor.core.errors import ConfigError, InitScriptError
from bootvisor.core.log import configure_logging
from bootvisor.main import run


def init_sentry(dsn=SENTRY_DSN):
    if dsn:
        sentry_sdk.init(dsn=dsn, traces_sample_rate=0.0)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(DEBUG)
    init_sentry()

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"[entrypoint] Invalid configuration: {e}")
        sys.exit(2)

    try:
        code = run(argv, config)
    except InitScriptError as e:
        logger.error(f"[entrypoint] Aborting startup: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"[entrypoint] Unexpected failure during startup: {e}")
        sentry_sdk.capture_exception(e)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
