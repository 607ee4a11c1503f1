"""CLI error handling helpers."""

import logging

import click

from duetrack.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Report a rejected input or records file and exit with status 1.

    The message goes to stderr. The error class and command path are logged
    at debug level for ``--log-level DEBUG`` runs.
    """
    logger.debug("%s in '%s': %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
