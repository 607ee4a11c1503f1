"""Deadline classification commands."""

import click

from duetrack.cli.error_handling import handle_domain_error
from duetrack.cli.output import (
    classification_to_dict,
    echo_json,
    format_amount,
    format_days,
)
from duetrack.cli.records import load_records
from duetrack.domain.deadline import classify
from duetrack.domain.entities import DeadlineSubject, SubjectDomain
from duetrack.domain.errors import DomainError
from duetrack.utils.date_parser import parse_date

DOMAIN_CHOICES = [d.value.lower() for d in SubjectDomain]


def _classify_single(ctx, today, reference_date: str, domain: str, settled: bool, as_json: bool):
    try:
        due = parse_date(reference_date, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    subject = DeadlineSubject(
        reference_date=due, is_settled=settled, domain=SubjectDomain(domain.upper())
    )
    result = classify(subject, today)

    if as_json:
        payload = classification_to_dict(result)
        payload["reference_date"] = due
        payload["today"] = today
        echo_json(payload)
        return

    click.echo(f"Reference date: {due}")
    click.echo(f"Today:          {today}")
    click.echo(f"Days:           {format_days(result.days_to_deadline)}")
    click.echo(f"Alert:          {result.alert_tag.value if result.alert_tag else '-'}")
    click.echo(f"Bucket:         {result.bucket.value}")


@click.command("classify")
@click.argument("records_file", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--date", "reference_date", help="Classify a single due/end date instead of a records file")
@click.option(
    "--domain",
    type=click.Choice(DOMAIN_CHOICES, case_sensitive=False),
    help="Record kind (single date defaults to payable; filters a records file)",
)
@click.option("--settled", is_flag=True, help="Treat the single date as already paid/received")
@click.option("--alerts-only", is_flag=True, help="Only list records carrying an alert tag")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def classify_command(
    ctx,
    records_file: str | None,
    reference_date: str | None,
    domain: str | None,
    settled: bool,
    alerts_only: bool,
    as_json: bool,
):
    """Classify records against their deadlines.

    Pass a JSON records file to classify every payable, contract and
    receivable in it, or use --date to classify a single deadline.

    Examples:
        duetrack classify records.json
        duetrack classify records.json --domain contract --alerts-only
        duetrack --today 2026-10-18 classify --date 2026-10-21
        duetrack classify --date +5 --domain contract
    """
    today = ctx.obj["today"]

    if records_file and reference_date:
        click.echo("Error: Use either RECORDS_FILE or --date, not both.", err=True)
        ctx.exit(1)

    if reference_date:
        _classify_single(ctx, today, reference_date, domain or "payable", settled, as_json)
        return

    if not records_file:
        click.echo("Error: Provide RECORDS_FILE or --date.", err=True)
        ctx.exit(1)

    try:
        record_set = load_records(records_file, today)
    except DomainError as e:
        handle_domain_error(ctx, e)

    items = record_set.items
    if domain:
        selected = SubjectDomain(domain.upper())
        items = [item for item in items if item.subject.domain == selected]

    rows = []
    for item in items:
        result = classify(item.subject, today)
        if alerts_only and result.alert_tag is None:
            continue
        rows.append((item, result))

    if as_json:
        payload = []
        for item, result in rows:
            entry = classification_to_dict(result)
            entry.update(
                {
                    "label": item.label,
                    "domain": item.subject.domain,
                    "reference_date": item.subject.reference_date,
                    "amount": item.amount,
                }
            )
            payload.append(entry)
        echo_json({"today": today, "records": payload})
        return

    if not rows:
        click.echo("No records found.")
        return

    click.echo(f"\nClassification as of {today}:")
    click.echo("-" * 100)
    click.echo(
        f"{'Record':<28} {'Kind':<11} {'Date':<11} {'Days':<14} {'Alert':<9} {'Bucket':<10} {'Amount':>12}"
    )
    click.echo("-" * 100)
    for item, result in rows:
        label = (item.label or "-")[:28]
        ref = item.subject.reference_date.isoformat() if item.subject.reference_date else "-"
        tag = result.alert_tag.value if result.alert_tag else "-"
        click.echo(
            f"{label:<28} {item.subject.domain.value.lower():<11} {ref:<11} "
            f"{format_days(result.days_to_deadline):<14} {tag:<9} {result.bucket.value:<10} "
            f"{format_amount(item.amount):>12}"
        )


def register_commands(cli):
    """Register classify command with main CLI."""
    cli.add_command(classify_command)
