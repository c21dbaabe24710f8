import os
import subprocess

from bootvisor.lib import initializer
from bootvisor.lib.initializer import prepare_directories


def test_creates_nested_directories_idempotently(tmp_path):
    dirs = [str(tmp_path / "a" / "b"), "", str(tmp_path / "c")]

    first = prepare_directories(dirs)
    second = prepare_directories(dirs)

    assert first == second == [dirs[0], dirs[2]]
    assert os.path.isdir(dirs[0])
    assert os.path.isdir(dirs[2])


def test_owner_is_applied(tmp_path):
    target = tmp_path / "owned"
    owner = str(os.getuid())

    prepare_directories([str(target)], owner=owner)

    assert target.stat().st_uid == os.getuid()


def test_chown_failure_is_logged_not_raised(tmp_path, monkeypatch, log_messages):
    def failing_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Operation not permitted")

    monkeypatch.setattr(initializer.subprocess, "run", failing_run)
    target = tmp_path / "restricted"

    assert prepare_directories([str(target)], owner="nobody:nogroup") == [str(target)]
    assert target.is_dir()
    assert any("Operation not permitted" in m for m in log_messages)


def test_missing_chown_binary_is_tolerated(tmp_path, monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(initializer.subprocess, "run", missing)
    assert initializer.change_owner(str(tmp_path), "root") is False
