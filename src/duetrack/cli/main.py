"""Main CLI entry point."""

import logging
import sys

import click

from duetrack.utils.business_calendar import DEFAULT_TIMEZONE, business_today
from duetrack.utils.date_parser import parse_date

# Import and register all commands at module level
from duetrack.cli.commands import (
    classify,
    reconcile,
    summary,
    notifications,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level_name: str) -> None:
    """Send log records to stderr at the requested level."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"Unknown log level '{level_name}'", param_hint="--log-level")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


@click.group()
@click.option(
    "--today",
    "today_str",
    help="Reference date for classification (overrides DUETRACK_TODAY; defaults to the current business date)",
    envvar="DUETRACK_TODAY",
)
@click.option(
    "--timezone",
    "timezone_name",
    default=DEFAULT_TIMEZONE,
    show_default=True,
    help="Business calendar time zone used to resolve today",
    envvar="DUETRACK_TIMEZONE",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    help="Logging verbosity (DEBUG, INFO, WARNING, ERROR)",
    envvar="DUETRACK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, today_str: str | None, timezone_name: str, log_level: str):
    """Duetrack - Obligation status and alert classification.

    Classify payables, contracts and receivables against their deadlines,
    reconcile travel expense ledgers and build status card summaries from
    JSON record files.
    """
    ctx.ensure_object(dict)

    # Resolve today only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(log_level)
        try:
            current = business_today(timezone_name)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

        ctx.obj["today"] = current
        if today_str:
            try:
                ctx.obj["today"] = parse_date(today_str, today=current)
            except ValueError as e:
                click.echo(f"Error: Invalid reference date: {e}", err=True)
                ctx.exit(1)
        logging.getLogger(__name__).debug("Using reference date %s", ctx.obj["today"])


# Register all commands
classify.register_commands(cli)
reconcile.register_commands(cli)
summary.register_commands(cli)
notifications.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
