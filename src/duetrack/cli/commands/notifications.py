"""Notification counter commands."""

import click

from duetrack.cli.error_handling import handle_domain_error
from duetrack.cli.output import echo_json, notification_counts_to_dict
from duetrack.cli.records import load_records
from duetrack.domain.errors import DomainError
from duetrack.domain.summary import SummaryService


@click.command("notifications")
@click.argument("records_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the counters as JSON")
@click.pass_context
def notifications(ctx, records_file: str, as_json: bool):
    """Show the alert counters behind the notification bell."""
    today = ctx.obj["today"]
    try:
        record_set = load_records(records_file, today)
    except DomainError as e:
        handle_domain_error(ctx, e)

    counts = SummaryService(today).notification_counts(record_set.items)

    if as_json:
        echo_json(notification_counts_to_dict(counts))
        return

    if counts.total == 0:
        click.echo("No notifications.")
        return

    rows = [
        ("Payables overdue", counts.ap_overdue),
        ("Payables due in 3 days or less", counts.ap_due_3),
        ("Payables due in 7 days or less", counts.ap_due_7),
        ("Contracts ending in 30 days (D-30)", counts.contracts_d30),
        ("Contracts ending in 7 days (D-7)", counts.contracts_d7),
        ("Contracts ending today", counts.contracts_today),
        ("Receivables late", counts.receivables_late),
    ]
    click.echo(f"\nNotifications as of {today}: {counts.total}")
    click.echo("-" * 50)
    for name, count in rows:
        if count:
            click.echo(f"{name:<40} {count:>9}")


def register_commands(cli):
    """Register notifications command with main CLI."""
    cli.add_command(notifications)
