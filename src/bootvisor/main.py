"""
main.py
- Runs the container startup pipeline once, top to bottom:
    - Initializer: create INIT_DIRS and chown them to INIT_OWNER
    - Script runner: /docker-entrypoint-init.d/*.sh (fatal on error)
    - SQL collector: /entrypoint.d/*.sh run, *.sql / *.sql.gz queued
    - Bootstrapper: load the queue into MySQL (ephemeral or external server)
    - Supervisor: launch the workload, forward signals, return its exit code
"""

from loguru import logger

from bootvisor.lib.initializer import prepare_directories
from bootvisor.lib.mysql_client import MysqlClient
from bootvisor.lib.retries import ReadinessPolicy
from bootvisor.lib.scripts import run_script_dir
from bootvisor.lib.sql_collector import collect_entrypoint_dir
from bootvisor.runner.bootstrap import Bootstrapper
from bootvisor.runner.supervisor import Supervisor


def run(argv, config, supervisor=None, env=None):
    """
    Execute the full startup sequence.

    Args:
        argv (list[str]): Final workload command; empty means config.default_command.
        config (EntrypointConfig): Resolved configuration for this start.
        supervisor (Supervisor | None): Child tracker, created if omitted.
        env (Mapping | None): Environment for init scripts, defaults to the current one.

    Returns:
        int: The workload's exit code.

    Raises:
        InitScriptError: When any init or entrypoint script fails; nothing later runs.
    """
    supervisor = supervisor or Supervisor()
    logger.debug(f"[main] {config!r}")

    prepare_directories(config.init_dirs, config.init_owner)
    run_script_dir(config.init_scripts_dir, env=env)
    queue = collect_entrypoint_dir(config.entrypoint_dir, env=env)

    supervisor.install_signal_handlers()
    argv = list(argv) or list(config.default_command)

    if queue:
        bootstrapper = Bootstrapper(
            client=MysqlClient(password=config.mysql_root_password),
            policy=ReadinessPolicy(config.ready_max_attempts, config.ready_interval),
            supervisor=supervisor,
        )
        bootstrapper.run(argv, queue)

    return supervisor.run(argv)
