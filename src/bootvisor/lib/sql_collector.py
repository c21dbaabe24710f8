"""
sql_collector.py
- Scans the entrypoint directory: shell scripts run immediately, SQL dumps are queued for loading.
- The SqlQueue is consumed exactly once; after drain() it stays empty.
"""

import os
from loguru import logger

from bootvisor.core.constants import SCRIPT_SUFFIX, SQL_GZ_SUFFIX, SQL_SUFFIX
from bootvisor.lib.scripts import list_entries, run_or_abort


class SqlQueue:
    def __init__(self):
        self._files = []
        self._drained = False

    def append(self, path):
        if self._drained:
            raise RuntimeError("SQL queue was already consumed")
        self._files.append(path)

    def drain(self):
        """Return the queued files in order and clear the queue for good."""
        files, self._files = self._files, []
        self._drained = True
        return files

    @property
    def drained(self):
        return self._drained

    def __len__(self):
        return len(self._files)

    def __bool__(self):
        return bool(self._files)

    def __iter__(self):
        return iter(list(self._files))


def classify(name):
    """
    Classify an entry by suffix.

    Returns:
        str | None: "script", "sql", "sql.gz", or None for anything else.
    """
    if name.endswith(SCRIPT_SUFFIX):
        return "script"
    if name.endswith(SQL_GZ_SUFFIX):
        return "sql.gz"
    if name.endswith(SQL_SUFFIX):
        return "sql"
    return None


def collect_entrypoint_dir(directory, queue=None, env=None):
    """
    Run scripts and queue SQL files from the entrypoint directory.

    Args:
        directory (str): Directory to scan, e.g. /entrypoint.d.
        queue (SqlQueue | None): Queue to append to; a new one is created if omitted.
        env (Mapping | None): Environment for the scripts.

    Returns:
        SqlQueue: Queued SQL files in lexical order.

    Raises:
        InitScriptError: When a script exits non-zero.
    """
    queue = queue if queue is not None else SqlQueue()
    if not os.path.isdir(directory):
        logger.debug(f"[collector] {directory} not present, nothing to collect.")
        return queue

    logger.info(f"[collector] Looking for scripts and SQL in {directory}")
    for path in list_entries(directory):
        kind = classify(os.path.basename(path)) if os.path.isfile(path) else None
        if kind == "script":
            run_or_abort(path, env=env)
        elif kind in ("sql", "sql.gz"):
            logger.info(f"[collector] Detected SQL: {path}")
            queue.append(path)
        else:
            logger.info(f"[collector] Ignoring file in {directory}: {path}")
    return queue
