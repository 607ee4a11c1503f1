"""Travel expense reconciliation commands."""

import click

from duetrack.cli.error_handling import handle_domain_error
from duetrack.cli.output import echo_json, format_amount, reconciliation_to_dict
from duetrack.cli.records import load_records
from duetrack.domain.errors import DomainError
from duetrack.domain.ledger import TravelExpenseLedger, reconcile
from duetrack.utils.amount_parser import parse_amount


def _parse_amounts(ctx, values: tuple[str, ...], option: str) -> list:
    amounts = []
    for value in values:
        try:
            amounts.append(parse_amount(value))
        except ValueError as e:
            click.echo(f"Error: Invalid {option} amount: {e}", err=True)
            ctx.exit(1)
    return amounts


def _echo_result(result, label: str | None = None) -> None:
    if label:
        click.echo(f"\n{label}")
    click.echo("-" * 50)
    click.echo(f"{'Expense amount':<30} {format_amount(result.base_amount):>19}")
    click.echo(f"{'Advances':<30} {format_amount(result.advances_total):>19}")
    click.echo(f"{'Returns':<30} {format_amount(result.returns_total):>19}")
    click.echo(f"{'Reimbursed':<30} {format_amount(result.reimbursed_total):>19}")
    click.echo("-" * 50)
    click.echo(f"{'Balance':<30} {format_amount(result.balance):>19}")
    click.echo(f"{'Remaining to reimburse':<30} {format_amount(result.remaining_reimbursable):>19}")
    click.echo(f"{'Status':<30} {result.status.value:>19}")
    if result.balance < 0:
        click.echo("Employee was advanced more than the expense and owes the difference back.")


@click.command("reconcile")
@click.argument("base_amount", required=False)
@click.option("--advance", "advances", multiple=True, help="Advance paid to the employee (repeatable)")
@click.option("--return", "returns", multiple=True, help="Amount returned by the employee (repeatable)")
@click.option("--reimbursement", "reimbursements", multiple=True, help="Formal reimbursement payment (repeatable)")
@click.option(
    "--enforce-cap",
    is_flag=True,
    help="Reject reimbursements above the amount left to reimburse",
)
@click.option(
    "--file",
    "records_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Reconcile every travel expense in a JSON records file",
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def reconcile_command(
    ctx,
    base_amount: str | None,
    advances: tuple[str, ...],
    returns: tuple[str, ...],
    reimbursements: tuple[str, ...],
    enforce_cap: bool,
    records_file: str | None,
    as_json: bool,
):
    """Reconcile a travel expense ledger.

    BASE_AMOUNT is the amount owed to the employee. Advances and
    reimbursements reduce the balance, returns add back to it.

    Examples:
        duetrack reconcile 1000 --advance 400 --reimbursement 600
        duetrack reconcile "1.500,00" --advance 500 --return 120,50
        duetrack reconcile --file records.json
    """
    if records_file:
        if base_amount or advances or returns or reimbursements:
            click.echo("Error: --file cannot be combined with BASE_AMOUNT or entry options.", err=True)
            ctx.exit(1)
        _reconcile_file(ctx, records_file, as_json)
        return

    if base_amount is None:
        click.echo("Error: Provide BASE_AMOUNT or --file.", err=True)
        ctx.exit(1)

    try:
        base = parse_amount(base_amount)
    except ValueError as e:
        click.echo(f"Error: Invalid base amount: {e}", err=True)
        ctx.exit(1)

    advance_amounts = _parse_amounts(ctx, advances, "advance")
    return_amounts = _parse_amounts(ctx, returns, "return")
    reimbursement_amounts = _parse_amounts(ctx, reimbursements, "reimbursement")

    try:
        ledger = TravelExpenseLedger(base)
        for amount in advance_amounts:
            ledger.add_advance(amount)
        for amount in return_amounts:
            ledger.add_return(amount)
        for amount in reimbursement_amounts:
            ledger.add_reimbursement(amount, enforce_cap=enforce_cap)
    except DomainError as e:
        handle_domain_error(ctx, e)

    result = ledger.reconcile()
    if as_json:
        echo_json(reconciliation_to_dict(result))
        return
    _echo_result(result)


def _reconcile_file(ctx, records_file: str, as_json: bool) -> None:
    today = ctx.obj["today"]
    try:
        record_set = load_records(records_file, today)
    except DomainError as e:
        handle_domain_error(ctx, e)

    results = [
        (record.label, reconcile(record.obligation))
        for record in record_set.travel_expenses
    ]

    if as_json:
        payload = []
        for label, result in results:
            entry = reconciliation_to_dict(result)
            entry["label"] = label
            payload.append(entry)
        echo_json({"travel_expenses": payload})
        return

    if not results:
        click.echo("No travel expenses found.")
        return

    for index, (label, result) in enumerate(results, start=1):
        _echo_result(result, label=label or f"Travel expense #{index}")


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile_command)
