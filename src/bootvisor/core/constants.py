"""
constants.py
- Project-wide defaults shared by the config layer and the runners.
- Includes well-known directories, file suffixes, and readiness timing.
"""

import signal

# --- Well-known Directories ---
DEFAULT_INIT_SCRIPTS_DIR = "/docker-entrypoint-init.d"
DEFAULT_ENTRYPOINT_DIR = "/entrypoint.d"
DEFAULT_CONFIG_PATH = "/etc/bootvisor/entrypoint.yml"

# --- File Classification ---
SCRIPT_SUFFIX = ".sh"
SQL_SUFFIX = ".sql"
SQL_GZ_SUFFIX = ".sql.gz"
SCRIPT_SHELL = "/bin/sh"

# --- Final Command ---
DEFAULT_COMMAND = ["/bin/sh"]

# --- MySQL Binaries ---
SERVER_BINARY = "mysqld"
CLIENT_BINARY = "mysql"
ADMIN_BINARY = "mysqladmin"
SKIP_NETWORKING_FLAG = "--skip-networking"

# --- Readiness Polling ---
DEFAULT_READY_MAX_ATTEMPTS = 30
DEFAULT_READY_INTERVAL = 1.0  # seconds

# --- Forwarded Signals ---
FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP, signal.SIGQUIT)
