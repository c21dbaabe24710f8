"""
scripts.py
- Runs one-shot shell scripts found in the init directories.
- Scripts run in lexical filename order, each in its own /bin/sh process with the container environment.
- The first failing script aborts the startup via InitScriptError.
"""

import os
import subprocess
from loguru import logger

from bootvisor.core.constants import SCRIPT_SHELL, SCRIPT_SUFFIX
from bootvisor.core.errors import InitScriptError


class ScriptResult:
    def __init__(self, path, returncode):
        self.path = path
        self.returncode = returncode

    @property
    def ok(self):
        return self.returncode == 0

    def __repr__(self):
        return f"ScriptResult(path={self.path!r}, returncode={self.returncode})"


def list_entries(directory):
    """
    Return visible entries of a directory in lexical order, as full paths.
    A missing directory yields an empty list.
    """
    if not os.path.isdir(directory):
        return []
    return [
        os.path.join(directory, name)
        for name in sorted(os.listdir(directory))
        if not name.startswith(".")
    ]


def run_script(path, env=None):
    """
    Execute a single shell script synchronously.

    Args:
        path (str): Script to run.
        env (Mapping | None): Environment for the child, defaults to the current one.

    Returns:
        ScriptResult: The outcome. Never raises for a non-zero exit.
    """
    logger.info(f"[scripts] Running script: {path}")
    try:
        returncode = subprocess.run([SCRIPT_SHELL, path], env=env).returncode
    except OSError as e:
        logger.error(f"[scripts] Could not start {SCRIPT_SHELL} for {path}: {e}")
        returncode = 127
    if returncode != 0:
        logger.error(f"[scripts] Script {path} exited with code {returncode}")
    return ScriptResult(path, returncode)


def run_or_abort(path, env=None):
    result = run_script(path, env=env)
    if not result.ok:
        raise InitScriptError(result)
    return result


def run_script_dir(directory, env=None):
    """
    Run every *.sh in a directory; other entries are logged and skipped.

    Returns:
        list[ScriptResult]: Results of the scripts that ran, all successful.

    Raises:
        InitScriptError: On the first script that exits non-zero.
    """
    if not os.path.isdir(directory):
        logger.debug(f"[scripts] {directory} not present, nothing to run.")
        return []

    logger.info(f"[scripts] Looking for init scripts in {directory}")
    results = []
    for path in list_entries(directory):
        if path.endswith(SCRIPT_SUFFIX) and os.path.isfile(path):
            results.append(run_or_abort(path, env=env))
        else:
            logger.info(f"[scripts] Ignoring file (unsupported extension): {path}")
    return results
