"""
errors.py
- Exception types raised across the entrypoint pipeline.
"""


class BootvisorError(Exception):
    pass


class ConfigError(BootvisorError):
    """Raised when a configuration value cannot be parsed."""


class InitScriptError(BootvisorError):
    """
    Raised when an init script exits non-zero. Aborts the whole startup.

    Args:
        result (ScriptResult): Outcome of the failing script.
    """

    def __init__(self, result):
        self.result = result
        super().__init__(f"Script {result.path} exited with code {result.returncode}")


class SqlLoadError(BootvisorError):
    """Raised when a single SQL file fails to load. Never fatal on its own."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {path}: {reason}")
