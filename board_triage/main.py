"""CLI entry point for the triage job."""

import asyncio
import sys

import click
import structlog

from board_triage.config.settings import TriageSettings
from board_triage.engine.classifier import classify
from board_triage.engine.coordinator import run_triage
from board_triage.engine.planner import build_plan
from board_triage.enums import TaskStatus
from board_triage.exceptions import BoardTriageError, ConfigurationError
from board_triage.models.domain import TriageReport, WorkItem
from board_triage.store.postgrest import PostgrestStore
from board_triage.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)

# Commands that never touch the store
COMMANDS_WITHOUT_CONFIG = ["classify"]


@click.group()
@click.option(
    "--config",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to YAML configuration file (default: read the environment)",
)
@click.option("--log-level", default="WARNING", help="Logging level")
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str) -> None:
    """board-triage: triage the task board inbox."""
    configure_logging(log_level)

    if ctx.invoked_subcommand in COMMANDS_WITHOUT_CONFIG:
        ctx.obj = {"settings": None}
        return

    try:
        settings = TriageSettings.from_yaml(config) if config else TriageSettings.from_env()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    ctx.obj = {"settings": settings}


@cli.command()
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum inbox items to triage (default: from configuration, 20)",
)
@click.pass_context
def run(ctx: click.Context, batch_size: int | None) -> None:
    """Triage the oldest inbox items once."""
    try:
        settings = ctx.obj["settings"]
        report = asyncio.run(_run_once(settings, batch_size))
    except BoardTriageError as e:
        click.echo(f"Error: {e}", err=True)
        log.debug("triage_run_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        log.error("triage_run_unexpected", exc_info=True)
        sys.exit(1)

    _print_report(report)


@cli.command("classify")
@click.argument("title")
@click.option("--description", default="", help="Item description")
def classify_command(title: str, description: str) -> None:
    """Preview classification and plan for a title, without the store."""
    verdict = classify(title, description)
    click.echo(f"bucket: {verdict.bucket.value}")
    click.echo(f"needs clarification: {'yes' if verdict.vague else 'no'}")

    if verdict.vague:
        click.echo("plan: none until the item is clarified")
        return

    item = WorkItem(id="preview", title=title, description=description, status=TaskStatus.INBOX, owner_id="")
    click.echo("plan:")
    for number, step in enumerate(build_plan(item, verdict.bucket), start=1):
        click.echo(f"  {number}. {step.title} [{step.bucket.value}]")
        click.echo(f"     done when: {step.definition_of_done}")


async def _run_once(settings: TriageSettings, batch_size: int | None) -> TriageReport:
    """Open the store and run one triage pass."""
    store = PostgrestStore(
        base_url=str(settings.store.url),
        service_key=settings.store.service_key.get_secret_value(),
        timeout=settings.store.timeout,
    )
    async with store:
        return await run_triage(store, settings, batch_size)


def _print_report(report: TriageReport) -> None:
    """Print the run summary: a total line, then one line per item."""
    if report.processed_count == 0:
        click.echo("0 items processed")
        return

    click.echo(f"{report.processed_count} items processed")
    for outcome in report.outcomes:
        extra = " (subtasks already existed)" if outcome.skipped_existing else ""
        click.echo(f"- {outcome.item_id}: +{outcome.subtasks_created} subtasks, status={outcome.status.value}{extra}")


if __name__ == "__main__":
    cli()
