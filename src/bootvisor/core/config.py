"""
config.py
- Defines global configuration values derived from environment variables.
- Builds the per-run EntrypointConfig from defaults, an optional YAML file, and the environment.
- Precedence: constants < YAML file (ENTRYPOINT_CONFIG) < environment variables.
"""

import os

from bootvisor.core import constants
from bootvisor.core.config_loader import load_yaml, preview_yaml
from bootvisor.core.errors import ConfigError

# --- Runtime Behavior Flags ---
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
SENTRY_DSN = os.getenv("SENTRY_DSN")
CONFIG_PATH = os.getenv("ENTRYPOINT_CONFIG", constants.DEFAULT_CONFIG_PATH)


def parse_dir_list(value):
    """
    Split a colon-separated path list, dropping empty segments.

    Args:
        value (str | list | None): "a:b::c" style string, or an already split list.

    Returns:
        list[str]: Paths in their original order.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(":")
    return [str(p) for p in value if p]


def _parse_number(name, raw, cast, minimum=0):
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {raw!r}")
    return value


def _section(cfg, key):
    value = cfg.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping, got {value!r}")
    return value


def _string(cfg, key, default=None):
    value = cfg.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string, got {value!r}")
    return value


def _dir_list(cfg, key):
    value = cfg.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(p, str) for p in value):
        return value
    raise ConfigError(f"{key} must be a colon-separated string or a list of paths, got {value!r}")


def _command(cfg, key):
    value = cfg.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list) and value and all(isinstance(a, str) for a in value):
        return value
    raise ConfigError(f"{key} must be a string or a non-empty list of strings, got {value!r}")


class EntrypointConfig:
    def __init__(
        self,
        init_dirs=None,
        init_owner=None,
        init_scripts_dir=constants.DEFAULT_INIT_SCRIPTS_DIR,
        entrypoint_dir=constants.DEFAULT_ENTRYPOINT_DIR,
        mysql_root_password=None,
        ready_max_attempts=constants.DEFAULT_READY_MAX_ATTEMPTS,
        ready_interval=constants.DEFAULT_READY_INTERVAL,
        default_command=None,
    ):
        self.init_dirs = list(init_dirs or [])
        self.init_owner = init_owner or None
        self.init_scripts_dir = init_scripts_dir
        self.entrypoint_dir = entrypoint_dir
        self.mysql_root_password = mysql_root_password or None
        self.ready_max_attempts = ready_max_attempts
        self.ready_interval = ready_interval
        if isinstance(default_command, str):
            default_command = [default_command]
        self.default_command = list(default_command or constants.DEFAULT_COMMAND)

    def __repr__(self):
        # Password intentionally masked
        return (
            f"EntrypointConfig(init_dirs={self.init_dirs!r}, init_owner={self.init_owner!r}, "
            f"init_scripts_dir={self.init_scripts_dir!r}, entrypoint_dir={self.entrypoint_dir!r}, "
            f"mysql_root_password={'***' if self.mysql_root_password else None}, "
            f"ready_max_attempts={self.ready_max_attempts}, ready_interval={self.ready_interval})"
        )


def load_config(environ=None, config_path=None):
    """
    Build the EntrypointConfig for this container start.

    Args:
        environ (Mapping | None): Environment to read, defaults to os.environ.
        config_path (str | None): YAML override file, defaults to ENTRYPOINT_CONFIG.

    Returns:
        EntrypointConfig
    """
    env = os.environ if environ is None else environ
    path = config_path or env.get("ENTRYPOINT_CONFIG") or CONFIG_PATH
    preview_yaml(path, name="entrypoint.yml")
    file_cfg = load_yaml(path)
    readiness = _section(file_cfg, "readiness")

    # Blank environment variables count as unset
    attempts = env.get("READY_MAX_ATTEMPTS") or readiness.get("max_attempts", constants.DEFAULT_READY_MAX_ATTEMPTS)
    interval = env.get("READY_INTERVAL") or readiness.get("interval", constants.DEFAULT_READY_INTERVAL)

    return EntrypointConfig(
        init_dirs=parse_dir_list(env.get("INIT_DIRS") or _dir_list(file_cfg, "init_dirs")),
        init_owner=env.get("INIT_OWNER") or _string(file_cfg, "init_owner"),
        init_scripts_dir=env.get("INIT_SCRIPTS_DIR") or _string(file_cfg, "init_scripts_dir", constants.DEFAULT_INIT_SCRIPTS_DIR),
        entrypoint_dir=env.get("ENTRYPOINT_DIR") or _string(file_cfg, "entrypoint_dir", constants.DEFAULT_ENTRYPOINT_DIR),
        mysql_root_password=env.get("MYSQL_ROOT_PASSWORD"),
        ready_max_attempts=_parse_number("READY_MAX_ATTEMPTS", attempts, int, minimum=1),
        ready_interval=_parse_number("READY_INTERVAL", interval, float),
        default_command=_command(file_cfg, "default_command"),
    )
