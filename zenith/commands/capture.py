"""Capture commands: scan a receipt, speak a phrase, or add by hand."""

import sqlite3
import sys
from datetime import date as date_cls
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from zenith.commands.admin import load_settings, require_database, require_valid_amount
from zenith.config import get_setting
from zenith.domain.candidate import ParsedCandidate, ParseFailure
from zenith.domain.models import (
    Merchant,
    Money,
    Transaction,
    TransactionCategory,
    TransactionType,
    dollars_to_money,
    find_category,
    format_money,
)
from zenith.domain.receipt import parse_receipt
from zenith.domain.voice import parse_voice
from zenith.logging_setup import get_logger
from zenith.store.queries import insert_transaction

console = Console()
logger = get_logger(__name__)


def normalize_date(raw_date: str | None) -> str:
    """Normalize a user-supplied date to YYYY-MM-DD (today when None).

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not raw_date:
        return date_cls.today().isoformat()
    try:
        return pd.to_datetime(raw_date).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e


def read_ocr_lines(source: str) -> list[str]:
    """Read recognized text lines from a file, or stdin when source is '-'.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).expanduser().read_text(encoding="utf-8")
    return [line for line in text.splitlines() if line.strip()]


def render_candidate(candidate: ParsedCandidate, symbol: str, title: str) -> None:
    """Show the parsed guess for confirmation."""
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Merchant", candidate.merchant)
    table.add_row("Amount", f"[red]{format_money(candidate.amount, symbol)}[/red]")
    table.add_row("Category", candidate.category.value)
    console.print(table)


def report_failure(failure: ParseFailure) -> None:
    console.print(f"[red]{failure.value}[/red]")
    console.print("[dim]Try again with a clearer receipt or phrase.[/dim]")
    sys.exit(1)


def confirm_and_save(candidate: ParsedCandidate, txn_date: str, source: str, save: bool | None) -> None:
    """Store the candidate as an expense once the user accepts it.

    Args:
        candidate: Parsed guess.
        txn_date: Transaction date (YYYY-MM-DD).
        source: Origin tag stored alongside the transaction.
        save: True/False to skip the prompt, None to ask.
    """
    if save is None:
        save = typer.confirm("Save this transaction?", default=True)
    if not save:
        console.print("[dim]Discarded[/dim]")
        return

    db_path = require_database()
    try:
        txn_id = insert_transaction(candidate.to_transaction(txn_date), source, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Saved %s transaction %d for %s", source, txn_id, candidate.merchant)
    console.print(f"[green]✓ Saved transaction #{txn_id}[/green]")


def scan_command(source: str, save: bool | None = None, date: str | None = None) -> None:
    """Parse OCR'd receipt text and optionally save it."""
    try:
        lines = read_ocr_lines(source)
        txn_date = normalize_date(date)
    except FileNotFoundError:
        console.print(f"[red]File not found: {source}[/red]")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    candidate, failure = parse_receipt(lines)
    if failure is not None or candidate is None:
        report_failure(failure or ParseFailure.AMOUNT_NOT_FOUND)
        return

    logger.debug("Receipt parsed from %d lines: %s", len(lines), candidate)
    symbol = get_setting(load_settings(), "currency_symbol")
    render_candidate(candidate, symbol, "Scanned Receipt")
    confirm_and_save(candidate, txn_date, "receipt", save)


def voice_command(text: str, save: bool | None = None, date: str | None = None) -> None:
    """Parse a spoken phrase and optionally save it."""
    try:
        txn_date = normalize_date(date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    candidate, failure = parse_voice(text)
    if failure is not None:
        report_failure(failure)
        return
    if candidate is None:
        console.print("[yellow]Nothing to parse[/yellow]")
        return

    logger.debug("Voice phrase parsed: %s", candidate)
    symbol = get_setting(load_settings(), "currency_symbol")
    render_candidate(candidate, symbol, "Voice Entry")
    confirm_and_save(candidate, txn_date, "voice", save)


def add_command(
    merchant: str,
    amount: float,
    category: str | None = None,
    income: bool = False,
    date: str | None = None,
) -> None:
    """Add a transaction manually."""
    db_path = require_database()
    symbol = get_setting(load_settings(), "currency_symbol")

    try:
        txn_date = normalize_date(date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, MM/DD/YYYY, etc.[/dim]")
        sys.exit(1)

    require_valid_amount(amount)
    if amount <= 0:
        console.print("[red]Amount must be positive[/red]")
        sys.exit(1)

    resolved = TransactionCategory.OTHER
    if category:
        found = find_category(category)
        if found is None:
            console.print(f"[red]Unknown category '{category}'[/red]")
            console.print(f"[dim]Choose from: {', '.join(c.value for c in TransactionCategory)}[/dim]")
            sys.exit(1)
        resolved = found

    cents = dollars_to_money(amount)
    txn = Transaction(
        merchant=Merchant(merchant),
        date=txn_date,
        amount=cents if income else Money(-cents),
        type=TransactionType.INCOME if income else TransactionType.EXPENSE,
        category=resolved,
    )

    try:
        txn_id = insert_transaction(txn, "manual", db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(
        f"[green]✓ Added #{txn_id}: {txn_date} {merchant} "
        f"{format_money(txn.amount, symbol, include_sign=True)} ({resolved.value})[/green]"
    )
