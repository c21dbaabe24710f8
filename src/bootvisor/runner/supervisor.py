"""
supervisor.py
- Owns the single tracked child process of the container (ephemeral DB first, then the workload).
- Forwards SIGINT, SIGTERM, SIGHUP and SIGQUIT verbatim to that child.
- Waits for the workload and reports its exit code so PID 1 exits with it.
"""

import signal
import subprocess
from loguru import logger

from bootvisor.core.constants import FORWARDED_SIGNALS


def exit_code_from(returncode):
    """Map a Popen return code to a shell-style exit code (signal N -> 128 + N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


class Supervisor:
    def __init__(self, popen=subprocess.Popen):
        self.child = None
        self._popen = popen

    def install_signal_handlers(self, signals=FORWARDED_SIGNALS):
        for sig in signals:
            signal.signal(sig, self._handle_signal)
        logger.debug(f"[supervisor] Forwarding signals: {', '.join(signal.Signals(s).name for s in signals)}")

    def _handle_signal(self, signum, frame):
        pid = self.child.pid if self.child is not None else None
        logger.info(f"[supervisor] Received {signal.Signals(signum).name}, forwarding to PID {pid}")
        self.forward(signum)

    def forward(self, signum):
        """
        Relay a signal to the tracked child, if any.

        Returns:
            bool: True if the signal was delivered.
        """
        child = self.child
        if child is None or child.poll() is not None:
            return False
        try:
            child.send_signal(signum)
        except OSError as e:
            # Child may already be gone
            logger.debug(f"[supervisor] Could not forward signal {signum} to PID {child.pid}: {e}")
            return False
        return True

    def track(self, proc):
        self.child = proc

    def release(self, proc=None):
        if proc is None or self.child is proc:
            self.child = None

    def launch(self, argv):
        argv = list(argv)
        if not argv:
            raise ValueError("No command to launch")
        logger.info(f"[supervisor] Executing: {' '.join(argv)}")
        proc = self._popen(argv)
        self.track(proc)
        return proc

    def wait(self):
        """Block until the tracked child exits. Returns its shell-style exit code."""
        child = self.child
        code = exit_code_from(child.wait())
        logger.info(f"[supervisor] Child process {child.pid} exited with code {code}")
        self.release(child)
        return code

    def run(self, argv):
        """
        Launch the final workload and wait for it.

        Returns:
            int: The workload's exit code, 127/126 if it could not be started.
        """
        try:
            self.launch(argv)
        except PermissionError as e:
            logger.error(f"[supervisor] Cannot execute {argv[0]}: {e}")
            return 126
        except OSError as e:
            logger.error(f"[supervisor] Cannot execute {argv[0]}: {e}")
            return 127
        return self.wait()
