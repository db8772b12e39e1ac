"""CLI entry point for zenith."""

import typer

from zenith.commands.admin import config_command, delete_command, export_command, init_command, list_command
from zenith.commands.capture import add_command, scan_command, voice_command
from zenith.commands.goals import goals_command
from zenith.commands.insight import insight_command
from zenith.commands.planner import plan_command
from zenith.commands.recurring import recurring_command
from zenith.commands.report import report_command
from zenith.logging_setup import configure_logging

app = typer.Typer(
    name="zenith",
    help="Zenith - receipt, voice and budget tracking from the terminal",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Zenith - receipt, voice and budget tracking from the terminal."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize zenith database and configuration."""
    init_command(force)


@app.command(name="config")
def config(
    key: str = typer.Argument(..., help="Dotted setting, e.g. default_income or insight.model"),
    value: str = typer.Argument(None, help="New value (omit to show the current one)"),
) -> None:
    """Show or change a setting."""
    config_command(key, value)


@app.command()
def scan(
    source: str = typer.Argument(..., help="File of recognized receipt text, or '-' for stdin"),
    save: bool = typer.Option(None, "--save/--no-save", help="Save without asking (default: ask)"),
    date: str = typer.Option(None, "--date", help="Transaction date (default: today)"),
) -> None:
    """Turn recognized receipt text into an expense."""
    scan_command(source, save, date)


@app.command()
def voice(
    text: str = typer.Argument(..., help='Spoken phrase, e.g. "I spent 15 dollars at Starbucks"'),
    save: bool = typer.Option(None, "--save/--no-save", help="Save without asking (default: ask)"),
    date: str = typer.Option(None, "--date", help="Transaction date (default: today)"),
) -> None:
    """Turn a spoken phrase into an expense."""
    voice_command(text, save, date)


@app.command()
def add(
    merchant: str,
    amount: float = typer.Argument(..., help="Amount (positive)"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default: Other)"),
    income: bool = typer.Option(False, "--income", help="Record as income instead of an expense"),
    date: str = typer.Option(None, "--date", help="Transaction date (default: today)"),
) -> None:
    """Add a transaction by hand."""
    add_command(merchant, amount, category, income, date)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions."""
    list_command(limit, all)


@app.command()
def delete(
    txn_id: int = typer.Argument(..., help="Transaction ID (see 'zenith list')"),
) -> None:
    """Delete a transaction."""
    delete_command(txn_id)


@app.command()
def plan(
    month: str = typer.Option(None, "--month", help="Month to plan (YYYY-MM)"),
    set_income: float = typer.Option(None, "--set-income", help="Set expected income for the month"),
    set_budget: str = typer.Option(None, "--set-budget", help="Category to budget (name or index)"),
    new_category: str = typer.Option(None, "--add-category", help="Create a custom category"),
    amount: float = typer.Option(None, "--amount", help="Budget amount for --set-budget or --add-category"),
    override: bool = typer.Option(False, "--override", help="Apply --set-budget to this month only"),
    hide: str = typer.Option(None, "--hide", help="Hide a category from the planner"),
    show: str = typer.Option(None, "--show", help="Show a hidden category again"),
) -> None:
    """Show your monthly planner, or edit income and budgets."""
    plan_command(month, set_income, set_budget, new_category, amount, override, hide, show)


@app.command(name="report")
def report(
    sort_by: str = typer.Option("value", help="Sort by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all time"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show your income and spending breakdown."""
    report_command(sort_by, histogram, all, month)


@app.command(name="export")
def export(
    output: str = typer.Argument(None, help="CSV file to write (default: timestamped file here)"),
) -> None:
    """Export your transactions to CSV."""
    export_command(output)


@app.command()
def recurring(
    add: str = typer.Option(None, "--add", help="Merchant for a new recurring transaction"),
    amount: float = typer.Option(None, "--amount", help="Amount for --add"),
    frequency: str = typer.Option("Monthly", "--frequency", help="Daily, Weekly, Bi-weekly, Monthly, Quarterly, Yearly"),
    category: str = typer.Option(None, "--category", "-c", help="Category for --add"),
    income: bool = typer.Option(False, "--income", help="Record --add as income"),
    start: str = typer.Option(None, "--start", help="First due date (default: today)"),
    process: bool = typer.Option(False, "--process", help="Generate transactions that are due"),
    pause: int = typer.Option(None, "--pause", help="Pause a recurring transaction by ID"),
    resume: int = typer.Option(None, "--resume", help="Resume a recurring transaction by ID"),
) -> None:
    """Manage recurring transactions."""
    recurring_command(add, amount, frequency, category, income, start, process, pause, resume)


@app.command()
def goals(
    add: str = typer.Option(None, "--add", help="Title of a new savings goal"),
    target: float = typer.Option(None, "--target", help="Amount to save"),
    current: float = typer.Option(None, "--current", help="Amount saved so far"),
    monthly: float = typer.Option(None, "--monthly", help="Planned monthly contribution"),
    deposit: float = typer.Option(None, "--deposit", help="Add to the saved amount of --update (negative withdraws)"),
    update: int = typer.Option(None, "--update", help="Change a goal by ID"),
    delete: int = typer.Option(None, "--delete", help="Delete a goal by ID"),
) -> None:
    """Track savings goals."""
    goals_command(add, target, current, monthly, deposit, update, delete)


@app.command()
def insight(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    remote: bool = typer.Option(False, "--remote", help="Ask the AI service instead of local rules"),
) -> None:
    """Get a one-line insight about your spending."""
    insight_command(month, remote)


if __name__ == "__main__":
    app()
