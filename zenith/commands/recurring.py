"""Recurring transaction commands."""

import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from zenith.commands.admin import load_settings, require_database, require_valid_amount
from zenith.commands.capture import normalize_date
from zenith.config import get_setting
from zenith.domain.models import (
    Merchant,
    Money,
    TransactionCategory,
    TransactionType,
    dollars_to_money,
    find_category,
    format_money,
)
from zenith.domain.recurring import RecurringFrequency, RecurringTransaction, process_due, upcoming
from zenith.logging_setup import get_logger
from zenith.store.queries import apply_recurring_run, get_recurring, insert_recurring, set_recurring_active

console = Console()
logger = get_logger(__name__)


def parse_frequency(text: str) -> RecurringFrequency | None:
    """Look up a frequency by value or name, ignoring case (e.g., "monthly", "bi-weekly")."""
    needle = text.strip().casefold()
    for frequency in RecurringFrequency:
        if needle in (frequency.value.casefold(), frequency.name.casefold()):
            return frequency
    return None


def render_rules(rules: list[RecurringTransaction], title: str, symbol: str) -> None:
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Merchant")
    table.add_column("Amount", justify="right")
    table.add_column("Frequency")
    table.add_column("Next Due", style="cyan")
    table.add_column("Status", justify="center")

    for rule in rules:
        color = "red" if rule.amount < 0 else "green"
        table.add_row(
            str(rule.id),
            rule.merchant,
            f"[{color}]{format_money(rule.amount, symbol, include_sign=True)}[/{color}]",
            rule.frequency.value,
            rule.next_due,
            "✓" if rule.active else "⏸",
        )

    console.print(table)


def add_recurring_action(
    merchant: str,
    amount: float,
    frequency: str,
    category: str | None,
    income: bool,
    start: str | None,
) -> None:
    db_path = require_database()

    parsed_frequency = parse_frequency(frequency)
    if parsed_frequency is None:
        console.print(f"[red]Unknown frequency '{frequency}'[/red]")
        console.print(f"[dim]Choose from: {', '.join(f.value for f in RecurringFrequency)}[/dim]")
        sys.exit(1)

    resolved = find_category(category) if category else TransactionCategory.OTHER
    if resolved is None:
        console.print(f"[red]Unknown category '{category}'[/red]")
        sys.exit(1)

    require_valid_amount(amount)
    if amount <= 0:
        console.print("[red]Amount must be positive[/red]")
        sys.exit(1)

    try:
        start_date = normalize_date(start)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    cents = dollars_to_money(amount)
    rule = RecurringTransaction(
        merchant=Merchant(merchant),
        amount=cents if income else Money(-cents),
        type=TransactionType.INCOME if income else TransactionType.EXPENSE,
        category=resolved,
        frequency=parsed_frequency,
        start_date=start_date,
        next_due=start_date,
    )
    rule_id = insert_recurring(rule, db_path)
    console.print(f"[green]✓ Added recurring #{rule_id}: {merchant} ({parsed_frequency.value}) from {start_date}[/green]")


def recurring_command(
    add: str | None = None,
    amount: float | None = None,
    frequency: str = "Monthly",
    category: str | None = None,
    income: bool = False,
    start: str | None = None,
    process: bool = False,
    pause: int | None = None,
    resume: int | None = None,
) -> None:
    """Manage recurring transactions."""
    db_path = require_database()
    symbol = get_setting(load_settings(), "currency_symbol")
    today = date.today().isoformat()

    try:
        if add is not None:
            if amount is None:
                console.print("[red]--add needs --amount[/red]")
                sys.exit(1)
            add_recurring_action(add, amount, frequency, category, income, start)
            return

        if pause is not None or resume is not None:
            rule_id = pause if pause is not None else resume
            assert rule_id is not None
            if not set_recurring_active(rule_id, pause is None, db_path):
                console.print(f"[red]No recurring transaction #{rule_id}[/red]")
                sys.exit(1)
            console.print(f"[green]✓ Recurring #{rule_id} {'paused' if pause is not None else 'resumed'}[/green]")
            return

        rules = get_recurring(db_path)

        if process:
            generated, updated = process_due(rules, today)
            apply_recurring_run(generated, updated, db_path)
            logger.info("Generated %d recurring transactions", len(generated))
            for txn in generated:
                console.print(
                    f"[green]✓[/green] Generated {txn.date} {txn.merchant} "
                    f"{format_money(txn.amount, symbol, include_sign=True)}"
                )
            if not generated:
                console.print("[dim]Nothing due[/dim]")
            return

        if not rules:
            console.print("[yellow]No recurring transactions[/yellow]")
            return

        render_rules(rules, "Recurring Transactions", symbol)
        soon = upcoming(rules, today)
        if soon:
            console.print(f"\n[bold]Due in the next 7 days:[/bold] {', '.join(r.merchant for r in soon)}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
