import pytest

from bootvisor import main as pipeline
from bootvisor.core.config import EntrypointConfig
from bootvisor.core.errors import InitScriptError
from bootvisor.runner.bootstrap import Bootstrapper

from fakes import FakeClient, FakeProc


class FakeSupervisor:
    def __init__(self, events, exit_code=0):
        self.events = events
        self.exit_code = exit_code
        self.child = None
        self.handlers_installed = False

    def install_signal_handlers(self):
        self.handlers_installed = True
        self.events.append(("handlers",))

    def track(self, proc):
        self.child = proc

    def release(self, proc=None):
        self.child = None

    def run(self, argv):
        self.events.append(("run", argv))
        return self.exit_code


@pytest.fixture
def layout(tmp_path):
    init_dir = tmp_path / "docker-entrypoint-init.d"
    entry_dir = tmp_path / "entrypoint.d"
    init_dir.mkdir()
    entry_dir.mkdir()
    return tmp_path, init_dir, entry_dir


def make_config(tmp_path, init_dir, entry_dir, **kwargs):
    return EntrypointConfig(
        init_dirs=[str(tmp_path / "data"), str(tmp_path / "logs")],
        init_scripts_dir=str(init_dir),
        entrypoint_dir=str(entry_dir),
        ready_interval=0,
        **kwargs,
    )


def test_pipeline_returns_workload_exit_code(layout, script_env):
    tmp_path, init_dir, entry_dir = layout
    env, log = script_env
    (init_dir / "01-init.sh").write_text('echo init >> "$RUN_LOG"\n')
    (entry_dir / "01-entry.sh").write_text('echo entry >> "$RUN_LOG"\n')
    events = []

    code = pipeline.run(["nginx", "-g", "daemon off;"], make_config(tmp_path, init_dir, entry_dir),
                        supervisor=FakeSupervisor(events, exit_code=7), env=env)

    assert code == 7
    assert (tmp_path / "data").is_dir() and (tmp_path / "logs").is_dir()
    assert log.read_text().split() == ["init", "entry"]
    assert events == [("handlers",), ("run", ["nginx", "-g", "daemon off;"])]


def test_failing_init_script_prevents_workload(layout, script_env):
    tmp_path, init_dir, entry_dir = layout
    env, log = script_env
    (init_dir / "01-fail.sh").write_text("exit 2\n")
    (entry_dir / "01-entry.sh").write_text('echo entry >> "$RUN_LOG"\n')
    events = []

    with pytest.raises(InitScriptError):
        pipeline.run(["mysqld"], make_config(tmp_path, init_dir, entry_dir), supervisor=FakeSupervisor(events), env=env)

    assert events == []
    assert not log.exists()


def test_no_arguments_defaults_to_shell(layout):
    tmp_path, init_dir, entry_dir = layout
    events = []
    pipeline.run([], make_config(tmp_path, init_dir, entry_dir), supervisor=FakeSupervisor(events))
    assert events[-1] == ("run", ["/bin/sh"])


def test_sql_loaded_into_ephemeral_server_before_real_mysqld(layout, monkeypatch):
    tmp_path, init_dir, entry_dir = layout
    (entry_dir / "a.sql").write_text("SELECT 1;")
    (entry_dir / "b.sql.gz").write_bytes(b"")
    events = []

    def popen(argv, **kwargs):
        events.append(("start", argv))
        return FakeProc(events, argv)

    monkeypatch.setattr(pipeline, "MysqlClient", lambda password=None: FakeClient(events))
    monkeypatch.setattr(pipeline, "Bootstrapper", lambda **kw: Bootstrapper(popen=popen, **kw))

    pipeline.run(["mysqld"], make_config(tmp_path, init_dir, entry_dir), supervisor=FakeSupervisor(events))

    assert events == [
        ("handlers",),
        ("start", ["mysqld", "--skip-networking"]),
        ("load", str(entry_dir / "a.sql")),
        ("load", str(entry_dir / "b.sql.gz")),
        ("terminate", 4242),
        ("wait", 4242),
        ("run", ["mysqld"]),
    ]


def test_no_arguments_uses_configured_default_command(layout):
    tmp_path, init_dir, entry_dir = layout
    events = []
    config = make_config(tmp_path, init_dir, entry_dir, default_command=["/bin/bash", "-l"])

    pipeline.run([], config, supervisor=FakeSupervisor(events))

    assert events[-1] == ("run", ["/bin/bash", "-l"])
