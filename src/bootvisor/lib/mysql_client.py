"""
mysql_client.py
- Thin wrapper over the mysql / mysqladmin command-line clients.
- Provides the readiness probe (mysqladmin ping) and the per-file SQL loader.
- Credentials: -uroot -p<password> when MYSQL_ROOT_PASSWORD is set, passwordless root otherwise.
"""

import gzip
import os
import shutil
import subprocess
from loguru import logger

from bootvisor.core.constants import ADMIN_BINARY, CLIENT_BINARY
from bootvisor.core.errors import SqlLoadError
from bootvisor.lib.sql_collector import classify

OPENERS = {
    "sql": open,
    "sql.gz": gzip.open,
}


class MysqlClient:
    def __init__(self, password=None, client_binary=CLIENT_BINARY, admin_binary=ADMIN_BINARY):
        self.password = password or None
        self.client_binary = client_binary
        self.admin_binary = admin_binary

    def auth_args(self):
        if self.password:
            return ["-uroot", f"-p{self.password}"]
        return ["-uroot"]

    def available(self):
        """True if the client binary can be found on PATH (or is an existing path)."""
        return shutil.which(self.client_binary) is not None

    def ping(self):
        """
        Run `mysqladmin ping` once.

        Returns:
            bool: True if the server answered.
        """
        try:
            result = subprocess.run(
                [self.admin_binary, "ping", *self.auth_args(), "--silent"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug(f"[mysql] Could not run {self.admin_binary}: {e}")
            return False
        return result.returncode == 0

    def load_file(self, path):
        """
        Stream one SQL file into the mysql client. Compressed dumps are decompressed on the fly.

        Raises:
            SqlLoadError: If the file cannot be read or the client exits non-zero.
        """
        kind = classify(os.path.basename(path))
        opener = OPENERS.get(kind)
        if opener is None:
            raise SqlLoadError(path, "unsupported SQL format")

        logger.info(f"[mysql] Loading {'compressed SQL' if kind == 'sql.gz' else 'SQL'}: {path}")
        try:
            proc = subprocess.Popen([self.client_binary, *self.auth_args()], stdin=subprocess.PIPE)
        except OSError as e:
            raise SqlLoadError(path, e)

        stream_error = None
        try:
            with opener(path, "rb") as src:
                shutil.copyfileobj(src, proc.stdin)
        except BrokenPipeError:
            # Client quit early; its exit code carries the reason
            pass
        except (OSError, EOFError) as e:
            stream_error = e
        finally:
            try:
                proc.stdin.close()
            except BrokenPipeError:
                pass
            returncode = proc.wait()

        if stream_error is not None:
            raise SqlLoadError(path, stream_error)
        if returncode != 0:
            raise SqlLoadError(path, f"{self.client_binary} exited with code {returncode}")
