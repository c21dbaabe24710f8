import os
import signal
import stat

import pytest
from loguru import logger

from bootvisor.core.constants import FORWARDED_SIGNALS


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def restore_signals():
    saved = {s: signal.getsignal(s) for s in FORWARDED_SIGNALS}
    yield
    for s, handler in saved.items():
        signal.signal(s, handler)


@pytest.fixture
def make_executable(tmp_path):
    """Write a small /bin/sh program into tmp_path and make it executable."""

    def _make(name, body):
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body)
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


@pytest.fixture
def script_env(tmp_path):
    log = tmp_path / "ran.log"
    env = dict(os.environ, RUN_LOG=str(log))
    return env, log
