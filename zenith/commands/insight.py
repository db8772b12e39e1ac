"""Insight command: local spending advice or a remote AI one-liner."""

import sqlite3
import sys

from rich.console import Console

from zenith.commands.admin import load_settings, require_database
from zenith.commands.planner import load_aggregate
from zenith.config import get_insight_api_key, get_setting
from zenith.dates import resolve_month
from zenith.domain.insight import spending_advice
from zenith.insight_client import fetch_financial_insight
from zenith.store.queries import get_transactions

console = Console()


def insight_command(month: str | None = None, remote: bool = False) -> None:
    """Print a short insight about spending."""
    db_path = require_database()

    try:
        target_month, month_display = resolve_month(month)
    except ValueError:
        console.print(f"[red]Invalid month '{month}'. Use YYYY-MM.[/red]")
        sys.exit(1)

    try:
        if not remote:
            console.print(f"[bold cyan]{month_display}[/bold cyan]")
            console.print(spending_advice(load_aggregate(target_month, db_path)))
            return

        config = load_settings()
        api_key = get_insight_api_key(config)
        if not api_key:
            console.print("[red]No API key configured.[/red]")
            console.print("[dim]Set GROQ_API_KEY or run: zenith config insight.api_key KEY[/dim]")
            sys.exit(1)

        transactions = get_transactions(db_path)
        with console.status("Asking Zenith Brain..."):
            message = fetch_financial_insight(api_key, transactions, model=get_setting(config, "insight.model"))
        console.print(message)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
