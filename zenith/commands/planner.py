"""Plan command: monthly budget vs. spending, income and free cash flow."""

import sqlite3
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from zenith.commands.admin import load_settings, require_database, require_valid_amount
from zenith.config import get_setting
from zenith.dates import month_range, resolve_month
from zenith.domain.budget import (
    BudgetAggregate,
    aggregate_budget,
    resolve_budget_category,
    validate_budget_limit,
)
from zenith.domain.insight import spending_advice
from zenith.domain.models import CategoryBudget, Money, Month, dollars_to_money, format_money, validate_amount
from zenith.logging_setup import get_logger
from zenith.store.queries import (
    add_category,
    get_category_budgets,
    get_monthly_incomes,
    get_monthly_overrides,
    get_transactions,
    set_category_hidden,
    set_category_limit,
    set_monthly_income,
    set_monthly_override,
)

console = Console()
logger = get_logger(__name__)

BAR_WIDTH = 20


def configured_default_income(config: dict[str, Any]) -> Money:
    """Standing monthly income from config. Unusable values count as no income."""
    raw = get_setting(config, "default_income")
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric default_income %r", raw)
        return Money(0)
    is_valid, error = validate_amount(amount)
    if not is_valid:
        logger.warning("Ignoring default_income %r: %s", raw, error)
        return Money(0)
    return dollars_to_money(amount)


def load_aggregate(target_month: Month, db_path: Path) -> BudgetAggregate:
    """Fetch everything the planner needs and aggregate it.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    since_date, until_date, _ = month_range(target_month)
    default_income = configured_default_income(load_settings())

    return aggregate_budget(
        transactions=get_transactions(db_path, since_date, until_date),
        budgets=get_category_budgets(db_path),
        month=target_month,
        overrides=get_monthly_overrides(target_month, db_path),
        incomes=get_monthly_incomes(db_path),
        default_income=default_income,
    )


def format_progress_bar(progress: float) -> str:
    """Colored bar: green below 70%, yellow below 90%, red from 90%."""
    filled = int(progress * BAR_WIDTH)
    bar = "█" * filled + "░" * (BAR_WIDTH - filled)
    if progress >= 0.9:
        return f"[red]{bar}[/red]"
    if progress >= 0.7:
        return f"[yellow]{bar}[/yellow]"
    return f"[green]{bar}[/green]"


def show_plan(aggregate: BudgetAggregate, month_display: str, symbol: str) -> None:
    """Render the planner for a month."""
    console.print(f"[bold cyan]{month_display} Planner[/bold cyan]\n")
    console.print(f"[italic]{spending_advice(aggregate)}[/italic]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Category", style="white")
    table.add_column("Spent", justify="right")
    table.add_column("Budget", justify="right")
    table.add_column("Available", justify="right")
    table.add_column("Progress")

    for idx, status in enumerate(aggregate.categories, 1):
        available_color = "red" if status.available < 0 else "green"
        table.add_row(
            str(idx),
            status.name,
            format_money(status.spent, symbol),
            format_money(status.budget, symbol),
            f"[{available_color}]{format_money(status.available, symbol)}[/{available_color}]",
            format_progress_bar(status.progress),
        )

    console.print(table)

    console.print(f"\n[bold]Income:[/bold]         {format_money(aggregate.income, symbol)}")
    console.print(f"[bold]Total Budget:[/bold]   {format_money(aggregate.total_budget, symbol)}")
    console.print(f"[bold]Total Spent:[/bold]    {format_money(aggregate.total_spent, symbol)}")

    if aggregate.free_cash_flow >= 0:
        console.print(
            f"[bold]Free Cash Flow:[/bold] [green]{format_money(aggregate.free_cash_flow, symbol)}[/green] "
            "[dim](safe to spend on wants)[/dim]"
        )
    else:
        console.print(
            f"[bold]Free Cash Flow:[/bold] [red]{format_money(aggregate.free_cash_flow, symbol)}[/red] "
            "[dim](you are over budget!)[/dim]"
        )


def find_category_or_exit(selection: str, db_path: Path) -> CategoryBudget:
    """Resolve a category by planner index, id or name, or exit."""
    budgets = get_category_budgets(db_path)
    found = resolve_budget_category(selection, budgets)
    if found is None:
        console.print(f"[red]Unknown category '{selection}'[/red]")
        console.print(f"[dim]Choose from: {', '.join(b.name for b in budgets)}[/dim]")
        sys.exit(1)
    return found


def set_budget_action(
    selection: str,
    amount: float,
    override: bool,
    target_month: Month,
    month_display: str,
    db_path: Path,
) -> None:
    """Set a standing limit, or a one-month override."""
    require_valid_amount(amount)
    category = find_category_or_exit(selection, db_path)
    limit = dollars_to_money(amount)
    is_valid, error = validate_budget_limit(limit)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    if override:
        set_monthly_override(category.category, target_month, limit, db_path)
        console.print(f"[green]✓ {category.name} budget for {month_display}: {format_money(limit)}[/green]")
    else:
        set_category_limit(category.category, limit, db_path)
        console.print(f"[green]✓ {category.name} monthly budget: {format_money(limit)}[/green]")
    logger.info("Budget for %s set to %d (override=%s)", category.category, limit, override)


def add_category_action(name: str, amount: float, db_path: Path) -> None:
    """Create a custom category with a standing limit."""
    require_valid_amount(amount)
    name = name.strip()
    if not name:
        console.print("[red]Category name cannot be empty[/red]")
        sys.exit(1)
    if any(budget.name.casefold() == name.casefold() for budget in get_category_budgets(db_path)):
        console.print(f"[red]Category '{name}' already exists[/red]")
        sys.exit(1)

    limit = dollars_to_money(amount)
    is_valid, error = validate_budget_limit(limit)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    category_id = add_category(name, limit, db_path=db_path)
    console.print(f"[green]✓ Added category {name} with monthly budget {format_money(limit)}[/green]")
    logger.info("Added custom category %s (%s)", name, category_id)


def plan_command(
    month: str | None = None,
    set_income: float | None = None,
    set_budget: str | None = None,
    new_category: str | None = None,
    amount: float | None = None,
    override: bool = False,
    hide: str | None = None,
    show: str | None = None,
) -> None:
    """Show or edit the monthly planner."""
    db_path = require_database()

    try:
        target_month, month_display = resolve_month(month)
    except ValueError:
        console.print(f"[red]Invalid month '{month}'. Use YYYY-MM.[/red]")
        sys.exit(1)

    symbol = get_setting(load_settings(), "currency_symbol")

    try:
        if set_income is not None:
            require_valid_amount(set_income)
            if set_income < 0:
                console.print("[red]Income must be positive[/red]")
                sys.exit(1)
            income = dollars_to_money(set_income)
            set_monthly_income(target_month, income, db_path)
            console.print(f"[green]✓ Income for {month_display}: {format_money(income, symbol)}[/green]")
            return

        if new_category is not None:
            if amount is None:
                console.print("[red]--add-category needs --amount[/red]")
                sys.exit(1)
            add_category_action(new_category, amount, db_path)
            return

        if set_budget is not None:
            if amount is None:
                console.print("[red]--set-budget needs --amount[/red]")
                sys.exit(1)
            set_budget_action(set_budget, amount, override, target_month, month_display, db_path)
            return

        if hide or show:
            category = find_category_or_exit(hide or show or "", db_path)
            set_category_hidden(category.category, bool(hide), db_path)
            state = "hidden" if hide else "visible"
            console.print(f"[green]✓ {category.name} is now {state}[/green]")
            return

        show_plan(load_aggregate(target_month, db_path), month_display, symbol)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
