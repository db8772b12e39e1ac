"""Report command for viewing income and spending summaries."""

import sqlite3
import sys

from rich.console import Console

from zenith.commands.admin import load_settings, require_database
from zenith.config import get_setting
from zenith.dates import month_range, resolve_month
from zenith.domain.models import Money, format_money
from zenith.domain.report import CategoryReport, calculate_histogram_bar_length, summarize_transactions
from zenith.store.queries import get_transactions

console = Console()

BAR_WIDTH = 30


def render_category_line(
    cat_report: CategoryReport,
    histogram: bool,
    max_amount: Money | None,
    symbol: str,
) -> None:
    """Render a single category line, with an optional histogram bar."""
    amount_display = format_money(cat_report.amount, symbol)
    share_display = f"({cat_report.share * 100:.0f}%)"

    if histogram and max_amount:
        bar_length = calculate_histogram_bar_length(cat_report.amount, max_amount, BAR_WIDTH)
        bar = "█" * bar_length
        console.print(f"  {cat_report.category.value:15} {amount_display:>12} {share_display:>6} {bar}")
    else:
        console.print(f"  {cat_report.category.value}: {amount_display} {share_display}")


def report_command(
    sort_by: str = "value",
    histogram: bool = True,
    all: bool = False,
    month: str | None = None,
) -> None:
    """Show income and spending breakdown."""
    db_path = require_database()
    symbol = get_setting(load_settings(), "currency_symbol")

    try:
        if all:
            since_date, until_date, period = None, None, "All Time"
        else:
            target_month, period = resolve_month(month)
            since_date, until_date, _ = month_range(target_month)
    except ValueError:
        console.print(f"[red]Invalid month '{month}'. Use YYYY-MM.[/red]")
        sys.exit(1)

    try:
        transactions = get_transactions(db_path, since_date, until_date)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print(f"[yellow]No transactions for {period}[/yellow]")
        return

    summary = summarize_transactions(transactions, sort_by)

    console.print(f"[bold cyan]Report: {period}[/bold cyan]\n")

    if summary.expenses:
        console.print("[bold red]Expenses[/bold red]")
        max_expense = max(c.amount for c in summary.expenses)
        for cat_report in summary.expenses:
            render_category_line(cat_report, histogram, max_expense, symbol)
        console.print()

    if summary.income:
        console.print("[bold green]Income[/bold green]")
        max_income = max(c.amount for c in summary.income)
        for cat_report in summary.income:
            render_category_line(cat_report, histogram, max_income, symbol)
        console.print()

    console.print(f"[bold]Total Income:[/bold]   [green]{format_money(summary.total_income, symbol)}[/green]")
    console.print(f"[bold]Total Expenses:[/bold] [red]{format_money(summary.total_expenses, symbol)}[/red]")
    balance_color = "green" if summary.balance >= 0 else "red"
    console.print(
        f"[bold]Net Balance:[/bold]    [{balance_color}]"
        f"{format_money(summary.balance, symbol, include_sign=True)}[/{balance_color}]"
    )
    console.print(f"[bold]Transactions:[/bold]   {summary.transaction_count}")
    if summary.savings_rate is not None:
        console.print(f"[bold]Savings Rate:[/bold]   {summary.savings_rate * 100:.0f}%")
