"""
bootstrap.py
- Loads queued SQL dumps into MySQL before the real workload starts.
- Ephemeral path: when the workload is mysqld, start it once with --skip-networking,
  wait for readiness, apply the queue, then stop it again.
- External path: for any other workload, load into an already reachable server
  (e.g. a sidecar) if the mysql client is installed. No server is started.
- Per-file failures are logged and never abort the rest of the queue.
"""

import enum
import subprocess
from loguru import logger

from bootvisor.core.constants import SERVER_BINARY, SKIP_NETWORKING_FLAG
from bootvisor.core.errors import SqlLoadError


class BootstrapState(enum.Enum):
    IDLE = "idle"
    STARTING = "starting"
    WAITING_READY = "waiting_ready"
    LOADING_QUEUE = "loading_queue"
    TIMED_OUT = "timed_out"
    STOPPED = "stopped"


class Bootstrapper:
    """
    Args:
        client (MysqlClient): Probe and loader.
        policy (ReadinessPolicy): How long to wait for the server.
        supervisor (Supervisor | None): Receives the ephemeral server so signals reach it.
        server_binary (str): Name that marks the workload as the database server.
        popen (callable): Process factory, replaceable in tests.
    """

    def __init__(self, client, policy, supervisor=None, server_binary=SERVER_BINARY, popen=subprocess.Popen):
        self.client = client
        self.policy = policy
        self.supervisor = supervisor
        self.server_binary = server_binary
        self._popen = popen
        self.state = BootstrapState.IDLE
        self.history = [BootstrapState.IDLE]
        self.loaded = []
        self.failed = []

    def _enter(self, state):
        logger.debug(f"[bootstrap] {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def is_server_command(self, argv):
        return bool(argv) and self.server_binary in argv[0]

    def run(self, argv, queue):
        """
        Consume the queue through the path matching the workload.

        Returns:
            BootstrapState: The final state (IDLE when there was nothing to load).
        """
        if not queue:
            queue.drain()
            return self.state
        if self.is_server_command(argv):
            self.load_ephemeral(argv, queue)
        else:
            self.load_external(queue)
        return self.state

    def load_ephemeral(self, argv, queue):
        files = queue.drain()
        self._enter(BootstrapState.STARTING)
        logger.info(f"[bootstrap] Starting temporary MySQL server to load {len(files)} SQL file(s)")
        try:
            proc = self._popen(
                [*argv, SKIP_NETWORKING_FLAG],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.error(f"[bootstrap] Could not start temporary server {argv[0]}: {e}. SQL files were not loaded.")
            self._enter(BootstrapState.STOPPED)
            return

        if self.supervisor is not None:
            self.supervisor.track(proc)
        try:
            self._wait_and_apply(files, timeout_message="Timed out waiting for temporary MySQL. SQL files were not loaded.")
        finally:
            logger.info(f"[bootstrap] Stopping temporary MySQL server (PID {proc.pid})")
            self._stop(proc)
            self._enter(BootstrapState.STOPPED)

    def load_external(self, queue):
        files = queue.drain()
        if not self.client.available():
            logger.warning("[bootstrap] mysql client not available; cannot load SQL files.")
            self._enter(BootstrapState.STOPPED)
            return

        logger.info("[bootstrap] Workload is not mysqld: loading SQL if a server is reachable")
        self._wait_and_apply(files, timeout_message="Could not contact MySQL to load SQL files.")
        self._enter(BootstrapState.STOPPED)

    def _wait_and_apply(self, files, timeout_message):
        self._enter(BootstrapState.WAITING_READY)
        if not self.policy.wait_until(self.client.ping):
            self._enter(BootstrapState.TIMED_OUT)
            logger.error(f"[bootstrap] {timeout_message}")
            return
        self._enter(BootstrapState.LOADING_QUEUE)
        logger.info("[bootstrap] MySQL is ready, applying SQL files")
        self.apply(files)

    def apply(self, files):
        for path in files:
            try:
                self.client.load_file(path)
                self.loaded.append(path)
            except SqlLoadError as e:
                logger.error(f"[bootstrap] Error loading {path}: {e.reason}")
                self.failed.append(path)
        logger.info(f"[bootstrap] SQL load finished: {len(self.loaded)} loaded, {len(self.failed)} failed")

    def _stop(self, proc):
        try:
            proc.terminate()
        except OSError:
            pass
        try:
            proc.wait()
        except OSError as e:
            logger.warning(f"[bootstrap] Waiting for temporary server failed: {e}")
        if self.supervisor is not None:
            self.supervisor.release(proc)
