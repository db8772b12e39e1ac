"""Savings goal commands."""

import sqlite3
import sys
from dataclasses import replace

from rich.console import Console
from rich.table import Table

from zenith.commands.admin import load_settings, require_database, require_valid_amount
from zenith.config import get_setting
from zenith.domain.goals import Goal, contribute, goal_progress, months_to_goal, validate_goal
from zenith.domain.models import Money, dollars_to_money, format_money
from zenith.logging_setup import get_logger
from zenith.store.queries import delete_goal, get_goal, get_goals, insert_goal, update_goal

console = Console()
logger = get_logger(__name__)

BAR_WIDTH = 20


def to_money(amount: float | None) -> Money | None:
    """Convert an optional dollar option to cents, exiting on non-finite or negative input."""
    if amount is None:
        return None
    require_valid_amount(amount)
    if amount < 0:
        console.print("[red]Goal amounts cannot be negative[/red]")
        sys.exit(1)
    return dollars_to_money(amount)


def render_goals(goals: list[Goal], symbol: str) -> None:
    table = Table(title="Savings Goals")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Goal")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Monthly", justify="right")
    table.add_column("Progress")
    table.add_column("ETA", justify="right")

    for goal in goals:
        progress = goal_progress(goal)
        filled = int(progress * BAR_WIDTH)
        months = months_to_goal(goal)
        if months == 0:
            eta = "[green]done[/green]"
        elif months is None:
            eta = "[dim]-[/dim]"
        else:
            eta = f"{months} mo"
        table.add_row(
            str(goal.id),
            goal.title,
            format_money(goal.current, symbol),
            format_money(goal.target, symbol),
            format_money(goal.monthly_contribution, symbol),
            f"[cyan]{'█' * filled}{'░' * (BAR_WIDTH - filled)}[/cyan] {progress:.0%}",
            eta,
        )

    console.print(table)


def validate_goal_or_exit(goal: Goal) -> None:
    is_valid, error = validate_goal(goal.title, goal.target)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)


def goals_command(
    add: str | None = None,
    target: float | None = None,
    current: float | None = None,
    monthly: float | None = None,
    deposit: float | None = None,
    update: int | None = None,
    delete: int | None = None,
) -> None:
    """Add, update, delete or list savings goals."""
    db_path = require_database()
    symbol = get_setting(load_settings(), "currency_symbol")

    target_cents = to_money(target)
    current_cents = to_money(current)
    monthly_cents = to_money(monthly)
    if deposit is not None:
        require_valid_amount(deposit)

    try:
        if add is not None:
            if target_cents is None:
                console.print("[red]--add needs --target[/red]")
                sys.exit(1)
            goal = Goal(
                title=add.strip(),
                current=current_cents or Money(0),
                target=target_cents,
                monthly_contribution=monthly_cents or Money(0),
            )
            validate_goal_or_exit(goal)
            goal_id = insert_goal(goal, db_path)
            console.print(f"[green]✓ Added goal #{goal_id}: {goal.title} ({format_money(goal.target, symbol)})[/green]")
            return

        if update is not None:
            existing = get_goal(update, db_path)
            if existing is None:
                console.print(f"[red]No goal #{update}[/red]")
                sys.exit(1)
            goal = replace(
                existing,
                current=existing.current if current_cents is None else current_cents,
                target=existing.target if target_cents is None else target_cents,
                monthly_contribution=existing.monthly_contribution if monthly_cents is None else monthly_cents,
            )
            if deposit is not None:
                goal = contribute(goal, dollars_to_money(deposit))
            validate_goal_or_exit(goal)
            update_goal(goal, db_path)
            console.print(
                f"[green]✓ {goal.title}: {format_money(goal.current, symbol)} of "
                f"{format_money(goal.target, symbol)} ({goal_progress(goal):.0%})[/green]"
            )
            logger.info("Updated goal %d", update)
            return

        if delete is not None:
            if not delete_goal(delete, db_path):
                console.print(f"[red]No goal #{delete}[/red]")
                sys.exit(1)
            console.print(f"[green]✓ Deleted goal #{delete}[/green]")
            return

        goals = get_goals(db_path)
        if not goals:
            console.print("[yellow]No savings goals yet[/yellow]")
            console.print("[dim]Add one with 'zenith goals --add NAME --target AMOUNT'[/dim]")
            return

        render_goals(goals, symbol)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
