"""Summary commands."""

import click

from duetrack.cli.date_filters import resolve_cli_date_range
from duetrack.cli.error_handling import handle_domain_error
from duetrack.cli.output import (
    echo_json,
    format_amount,
    reimbursement_summary_to_dict,
    summary_report_to_dict,
)
from duetrack.cli.records import load_records
from duetrack.domain.entities import (
    AlertTag,
    Bucket,
    ReimbursementStatus,
    SubjectDomain,
)
from duetrack.domain.errors import DomainError
from duetrack.domain.summary import SummaryService

# Cards shown per record kind, in display order
DOMAIN_BUCKETS = {
    SubjectDomain.PAYABLE: (Bucket.VENCIDO, Bucket.ABERTO, Bucket.PAGO),
    SubjectDomain.CONTRACT: (Bucket.EXPIRADO, Bucket.ATIVO),
    SubjectDomain.RECEIVABLE: (Bucket.ATRASADO, Bucket.A_RECEBER, Bucket.RECEBIDO),
}

DOMAIN_ALERTS = {
    SubjectDomain.PAYABLE: (AlertTag.VENCIDO, AlertTag.D_3, AlertTag.D_7),
    SubjectDomain.CONTRACT: (AlertTag.EXPIRADO, AlertTag.HOJE, AlertTag.D_7, AlertTag.D_30),
    SubjectDomain.RECEIVABLE: (),
}

DOMAIN_TITLES = {
    SubjectDomain.PAYABLE: "Accounts Payable",
    SubjectDomain.CONTRACT: "Contracts",
    SubjectDomain.RECEIVABLE: "Receivables",
}


def _echo_total_line(name: str, count: int, amount) -> None:
    click.echo(f"    {name:<30} {count:>8} {format_amount(amount):>20}")


def _display_report(domain: SubjectDomain, report) -> None:
    click.echo(DOMAIN_TITLES[domain])
    click.echo("*" * 64)
    buckets = DOMAIN_BUCKETS[domain]
    if report.bucket(Bucket.SEM_PRAZO).count:
        buckets = buckets + (Bucket.SEM_PRAZO,)
    for bucket in buckets:
        total = report.bucket(bucket)
        _echo_total_line(bucket.value, total.count, total.amount)

    alerts = [tag for tag in DOMAIN_ALERTS[domain] if report.alert(tag).count]
    if alerts:
        click.echo("  Alerts")
        for tag in alerts:
            total = report.alert(tag)
            _echo_total_line(tag.value, total.count, total.amount)

    click.echo("-" * 64)
    click.echo(f"{'Subtotal':<34} {report.totals.count:>8} {format_amount(report.totals.amount):>20}")
    click.echo("=" * 64)
    click.echo()


@click.command("summary")
@click.argument("records_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--domain",
    type=click.Choice([d.value.lower() for d in SubjectDomain], case_sensitive=False),
    help="Only summarize one record kind",
)
@click.option("--start-date", help="Only records due on or after this date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="Only records due on or before this date (YYYY-MM-DD or relative)")
@click.option("--this-week", is_flag=True, help="Records due in the current week")
@click.option("--this-month", is_flag=True, help="Records due in the current month")
@click.option("--this-year", is_flag=True, help="Records due in the current year")
@click.option("--last-month", is_flag=True, help="Records due in the previous month")
@click.option("--next-month", is_flag=True, help="Records due in the next month")
@click.option("--next-7-days", is_flag=True, help="Records due from today through the next 7 days")
@click.option("--next-30-days", is_flag=True, help="Records due from today through the next 30 days")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def summary(
    ctx,
    records_file: str,
    domain: str | None,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    next_month: bool,
    next_7_days: bool,
    next_30_days: bool,
    as_json: bool,
):
    """Show status card totals for a records file.

    Counts and amounts are grouped by status bucket and, separately, by
    alert tag. Travel expenses are grouped by reimbursement status.
    """
    today = ctx.obj["today"]
    start, end = resolve_cli_date_range(
        ctx,
        today=today,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "next-month": next_month,
            "next-7-days": next_7_days,
            "next-30-days": next_30_days,
        },
    )

    try:
        record_set = load_records(records_file, today)
    except DomainError as e:
        handle_domain_error(ctx, e)

    service = SummaryService(today)
    domains = [SubjectDomain(domain.upper())] if domain else list(SubjectDomain)
    reports = {
        d: service.build_summary_report(
            record_set.items, domain=d, period_start=start, period_end=end
        )
        for d in domains
    }
    reports = {d: r for d, r in reports.items() if r.totals.count}

    travel = None
    if record_set.travel_expenses and not domain:
        travel = service.reimbursement_summary(
            record.obligation for record in record_set.travel_expenses
        )

    if as_json:
        payload = {
            "today": today,
            "reports": {d: summary_report_to_dict(r) for d, r in reports.items()},
        }
        if travel is not None:
            payload["travel_expenses"] = reimbursement_summary_to_dict(travel)
        echo_json(payload)
        return

    if not reports and travel is None:
        click.echo("No records found.")
        return

    click.echo(f"\nStatus Summary as of {today}:")
    if start is not None or end is not None:
        click.echo(f"Period: {start or '...'} to {end or '...'}")
    click.echo("-" * 64)
    click.echo(f"{'Bucket':<34} {'Count':>8} {'Amount':>20}")
    click.echo("-" * 64)

    for d, report in reports.items():
        _display_report(d, report)

    if travel is not None:
        click.echo("Travel Expenses")
        click.echo("*" * 64)
        for status in ReimbursementStatus:
            total = travel.status(status)
            _echo_total_line(status.value, total.count, total.amount)
        click.echo("-" * 64)
        click.echo(f"{'Outstanding balance':<34} {travel.count:>8} {format_amount(travel.outstanding_balance):>20}")
        click.echo("=" * 64)


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
