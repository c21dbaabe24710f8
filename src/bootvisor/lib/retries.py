"""
retries.py
- Fixed-interval readiness polling shared by the ephemeral and external database paths.
- Wraps tenacity so a probe is retried until it returns True or the attempt budget runs out.
"""

import time
from loguru import logger
from tenacity import Retrying, retry_if_exception_type, retry_if_result, stop_after_attempt, wait_fixed

from bootvisor.core.constants import DEFAULT_READY_INTERVAL, DEFAULT_READY_MAX_ATTEMPTS


def _log_attempt(retry_state):
    logger.debug(f"[retries] Not ready yet (attempt {retry_state.attempt_number}), retrying...")


class ReadinessPolicy:
    """
    Poll a probe a fixed number of times with a fixed pause between attempts.

    Args:
        max_attempts (int): Total probe calls before giving up.
        interval (float): Seconds to wait between attempts.
        sleep (callable): Sleep function, replaceable in tests.
    """

    def __init__(self, max_attempts=DEFAULT_READY_MAX_ATTEMPTS, interval=DEFAULT_READY_INTERVAL, sleep=time.sleep):
        self.max_attempts = max_attempts
        self.interval = interval
        self.sleep = sleep

    def wait_until(self, probe):
        """
        Call probe() until it returns True.

        Returns:
            bool: True once the probe succeeds, False when the budget is exhausted.
        """
        retryer = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.interval),
            retry=retry_if_result(lambda ready: ready is not True) | retry_if_exception_type(OSError),
            retry_error_callback=lambda retry_state: False,
            before_sleep=_log_attempt,
            sleep=self.sleep,
        )
        return retryer(probe)

    def __repr__(self):
        return f"ReadinessPolicy(max_attempts={self.max_attempts}, interval={self.interval})"
