"""Command-line entry point.

Usage::

    issueclass run 7 --start 1000 --end 2000 --state state.json
    issueclass show 7 --state state.json
"""

from __future__ import annotations

import json
from dataclasses import asdict

import click

from issueclass.config import load_config
from issueclass.engine.task import ClassificationTaskInfo, ClassificationTaskRunner, TaskContext
from issueclass.errors import NotFoundError, RunFailure
from issueclass.models.config import IssueClassConfig
from issueclass.observability.logging import get_logger, setup_logging
from issueclass.store.state_file import load_state, save_state


@click.group()
@click.option("--log-level", default=None, help="Override ISSUECLASS_LOG_LEVEL.")
@click.option("--console-log", is_flag=True, help="Human-readable logs instead of JSON.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, console_log: bool) -> None:
    """Assign issue types to merged anomalies."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    setup_logging(log_level or config.log.level, json_output=not console_log)
    ctx.obj = config


@cli.command()
@click.argument("config_id", type=int)
@click.option("--start", "window_start", type=int, required=True, help="Window start (epoch ms).")
@click.option("--end", "window_end", type=int, required=True, help="Window end (epoch ms).")
@click.option("--state", "state_path", default=None, help="JSON state file; defaults to ISSUECLASS_STATE_FILE.")
@click.pass_obj
def run(obj: IssueClassConfig, config_id: int, window_start: int, window_end: int, state_path: str | None) -> None:
    """Classify one window of classification config CONFIG_ID."""
    log = get_logger("cli")
    path = state_path or obj.state.path
    stores = load_state(path)
    try:
        config = stores.configs.find_by_id(config_id)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc

    context = TaskContext(
        function_store=stores.functions,
        anomaly_store=stores.anomalies,
        config_store=stores.configs,
        engine_config=obj.engine,
    )
    try:
        results = ClassificationTaskRunner().execute(
            ClassificationTaskInfo(window_start, window_end, config),
            context,
        )
    except RunFailure as exc:
        log.error("run_command_failed", config_id=config_id, stage=exc.stage)
        raise click.ClickException(str(exc)) from exc

    save_state(stores, path)
    summary = results[0].summary
    click.echo(
        f"config {summary.config_id}: {summary.qualified_main_anomalies} qualified, "
        f"{summary.dimension_groups} group(s), {summary.updated_anomalies} updated, "
        f"watermark={summary.watermark}"
    )


@cli.command()
@click.argument("config_id", type=int)
@click.option("--state", "state_path", default=None, help="JSON state file; defaults to ISSUECLASS_STATE_FILE.")
@click.pass_obj
def show(obj: IssueClassConfig, config_id: int, state_path: str | None) -> None:
    """Print classification config CONFIG_ID as JSON."""
    stores = load_state(state_path or obj.state.path)
    try:
        config = stores.configs.find_by_id(config_id)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(asdict(config), indent=2, sort_keys=True))
