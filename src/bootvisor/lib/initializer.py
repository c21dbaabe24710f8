"""
initializer.py
- Creates the directories listed in INIT_DIRS and hands them to INIT_OWNER.
- Ownership changes are best-effort: rootless or restricted containers may refuse chown.
"""

import os
import subprocess
from loguru import logger


def change_owner(path, owner):
    """
    Recursively chown a path. Never raises.

    Returns:
        bool: True if chown succeeded, False otherwise.
    """
    try:
        result = subprocess.run(
            ["chown", "-R", owner, path],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.warning(f"[init] Could not run chown for {path}: {e}")
        return False
    if result.returncode != 0:
        logger.warning(f"[init] chown {owner} {path} failed ({result.returncode}): {result.stderr.strip()}")
        return False
    return True


def prepare_directories(dirs, owner=None):
    """
    Create each directory (with parents) and optionally assign ownership.

    Args:
        dirs (list[str]): Paths in INIT_DIRS order. Empty entries are skipped.
        owner (str | None): chown spec, "user" or "user:group".

    Returns:
        list[str]: The directories that were created or already existed.
    """
    prepared = []
    for d in dirs:
        if not d:
            continue
        logger.info(f"[init] Creating directory: {d}")
        os.makedirs(d, exist_ok=True)
        if owner:
            logger.info(f"[init] Assigning owner {owner} to {d}")
            change_owner(d, owner)
        prepared.append(d)
    return prepared
