"""Admin commands for init, settings, listing and exporting transactions."""

import sqlite3
import sys
import tomllib
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zenith.config import create_default_config, get_config_path, get_setting, load_config_or_defaults, set_setting
from zenith.domain.models import format_money, validate_amount
from zenith.logging_setup import get_logger
from zenith.store.export import export_transactions_csv
from zenith.store.queries import delete_transaction, get_transactions
from zenith.store.schema import database_exists, get_db_path, init_database

console = Console()
logger = get_logger(__name__)


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized (default categories seeded)")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize zenith database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'zenith init --force' to overwrite[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()
            logger.info("Removed existing database %s", db_path)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def require_database() -> Path:
    """Return the database path, exiting with a hint if it does not exist."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'zenith init' first.[/red]", style="bold")
        sys.exit(1)
    return db_path


def load_settings() -> dict[str, Any]:
    """Load the config file, or defaults when there is none. Exits if it is malformed."""
    config_path = get_config_path()
    try:
        return load_config_or_defaults(config_path)
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file {config_path}: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def require_valid_amount(amount: float) -> None:
    """Exit with a message unless the amount is finite and in range."""
    is_valid, error = validate_amount(amount)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)


def list_command(
    limit: int = 50,
    all: bool = False,
) -> None:
    """List transactions."""
    db_path = require_database()
    symbol = get_setting(load_settings(), "currency_symbol")

    try:
        actual_limit = None if all else limit
        transactions = get_transactions(db_path, limit=actual_limit)

        if not transactions:
            console.print("[yellow]No transactions found[/yellow]")
            return

        title = (
            f"Transactions (showing all {len(transactions)})" if all else f"Transactions (showing {len(transactions)})"
        )
        table = Table(title=title)
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Merchant", style="white")
        table.add_column("Amount", justify="right")
        table.add_column("Category", style="magenta")

        for txn in transactions:
            color = "red" if txn.amount < 0 else "green"
            amount_display = f"[{color}]{format_money(txn.amount, symbol, include_sign=True)}[/{color}]"
            table.add_row(str(txn.id), txn.date, txn.merchant, amount_display, txn.category.value)

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_command(txn_id: int) -> None:
    """Delete a transaction by ID."""
    db_path = require_database()

    try:
        if not delete_transaction(txn_id, db_path):
            console.print(f"[red]No transaction #{txn_id}[/red]")
            sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Deleted transaction %d", txn_id)
    console.print(f"[green]✓ Deleted transaction #{txn_id}[/green]")


def export_command(output: str | None = None) -> None:
    """Export all transactions to CSV."""
    db_path = require_database()

    if output:
        output_path = Path(output).expanduser()
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path.cwd() / f"zenith_transactions_{timestamp}.csv"

    try:
        transactions = get_transactions(db_path)
        count = export_transactions_csv(transactions, output_path)
        console.print(f"[green]✓[/green] Exported {count} transactions to: {output_path}")
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)


def config_command(key: str, value: str | None = None) -> None:
    """Show or set a dotted config setting."""
    config_path = get_config_path()

    config = load_settings()
    try:
        current = get_setting(config, key)
        default = get_setting({}, key)
    except (KeyError, TypeError):
        console.print(f"[red]Unknown setting '{key}'[/red]")
        sys.exit(1)

    if value is None:
        console.print(f"{key} = {current}")
        return

    if isinstance(default, dict):
        console.print(f"[red]'{key}' is a section; set one of its keys instead[/red]")
        sys.exit(1)

    new_value: str | float = value
    if isinstance(default, float):
        try:
            new_value = float(value)
        except ValueError:
            console.print(f"[red]'{key}' needs a number, got '{value}'[/red]")
            sys.exit(1)
        require_valid_amount(new_value)

    try:
        set_setting(key, new_value, config_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
    console.print(f"[green]✓ {key} = {new_value}[/green]")
