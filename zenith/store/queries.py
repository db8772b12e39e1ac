"""Database query functions."""

import sqlite3
import uuid
from pathlib import Path
from typing import Any

from zenith.domain.goals import Goal
from zenith.domain.models import (
    CategoryBudget,
    CategoryId,
    Merchant,
    Money,
    Month,
    MonthlyBudgetOverride,
    MonthlyIncome,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from zenith.domain.recurring import RecurringFrequency, RecurringTransaction
from zenith.store.schema import get_db_path

# Custom categories sort after the built-in ones
CUSTOM_CATEGORY_ORDER = 999
CUSTOM_CATEGORY_ICON = "cart.fill"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        merchant=Merchant(row["merchant"]),
        date=row["date"],
        amount=Money(row["amount"]),
        type=TransactionType(row["type"]),
        category=TransactionCategory(row["category"]),
        icon=row["icon"],
    )


def _row_to_recurring(row: sqlite3.Row) -> RecurringTransaction:
    return RecurringTransaction(
        id=row["id"],
        merchant=Merchant(row["merchant"]),
        amount=Money(row["amount"]),
        type=TransactionType(row["type"]),
        category=TransactionCategory(row["category"]),
        frequency=RecurringFrequency(row["frequency"]),
        start_date=row["start_date"],
        next_due=row["next_due"],
        last_generated=row["last_generated"],
        active=bool(row["active"]),
    )


def insert_transaction(txn: Transaction, source: str | None = None, db_path: Path | None = None) -> int:
    """Insert a transaction.

    Args:
        txn: Transaction to store (its id is ignored).
        source: Optional origin tag (e.g., 'receipt', 'voice', 'manual').
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new row.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO transactions (merchant, date, amount, type, category, icon, source)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    txn.merchant,
                    txn.date,
                    txn.amount,
                    txn.type.value,
                    txn.category.value,
                    txn.display_icon,
                    source,
                ),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_transactions(
    db_path: Path | None = None,
    since_date: str | None = None,
    until_date: str | None = None,
    limit: int | None = None,
) -> list[Transaction]:
    """Get transactions, newest first.

    Args:
        db_path: Path to the database file. If None, uses default location.
        since_date: Optional start date (inclusive, YYYY-MM-DD).
        until_date: Optional end date (exclusive, YYYY-MM-DD).
        limit: Maximum number of transactions to return. If None, returns all.

    Returns:
        List of transactions ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT id, merchant, date, amount, type, category, icon FROM transactions"
        conditions: list[str] = []
        params: list[Any] = []

        if since_date:
            conditions.append("date >= ?")
            params.append(since_date)
        if until_date:
            conditions.append("date < ?")
            params.append(until_date)
        if conditions:
            query += " WHERE " + " AND ".join(conditions)

        query += " ORDER BY date DESC, id DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [_row_to_transaction(row) for row in cursor.fetchall()]


def delete_transaction(txn_id: int, db_path: Path | None = None) -> bool:
    """Delete a transaction.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def get_category_budgets(db_path: Path | None = None) -> list[CategoryBudget]:
    """Get all categories with their standing limits, in display order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, name, budget_limit, order_index, hidden FROM categories ORDER BY order_index")
        return [
            CategoryBudget(
                category=CategoryId(row["id"]),
                name=row["name"],
                limit=Money(row["budget_limit"]),
                order_index=row["order_index"],
                hidden=bool(row["hidden"]),
            )
            for row in cursor.fetchall()
        ]


def set_category_limit(category: CategoryId, limit: Money, db_path: Path | None = None) -> bool:
    """Set a category's standing monthly limit.

    Returns:
        True if the category exists and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("UPDATE categories SET budget_limit = ? WHERE id = ?", (limit, category))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def set_category_hidden(category: CategoryId, hidden: bool, db_path: Path | None = None) -> bool:
    """Hide or show a category in the planner.

    Returns:
        True if the category exists and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("UPDATE categories SET hidden = ? WHERE id = ?", (int(hidden), category))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def add_category(
    name: str,
    limit: Money,
    icon: str = CUSTOM_CATEGORY_ICON,
    db_path: Path | None = None,
) -> CategoryId:
    """Add a user-defined category after the built-in ones.

    Args:
        name: Display name.
        limit: Standing monthly limit in cents.
        icon: Display hint.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Generated id of the new category.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    category_id = CategoryId(str(uuid.uuid4()))
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO categories (id, name, icon, budget_limit, order_index) VALUES (?, ?, ?, ?, ?)",
                (category_id, name, icon, limit, CUSTOM_CATEGORY_ORDER),
            )
            conn.commit()
            return category_id
        except sqlite3.Error:
            conn.rollback()
            raise


def get_monthly_overrides(month: Month | None = None, db_path: Path | None = None) -> list[MonthlyBudgetOverride]:
    """Get per-month budget overrides, optionally for one month only.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        if month:
            cursor.execute("SELECT category, month, budget_limit FROM monthly_budgets WHERE month = ?", (month,))
        else:
            cursor.execute("SELECT category, month, budget_limit FROM monthly_budgets")
        return [
            MonthlyBudgetOverride(
                category=CategoryId(row["category"]),
                month=Month(row["month"]),
                limit=Money(row["budget_limit"]),
            )
            for row in cursor.fetchall()
        ]


def set_monthly_override(category: CategoryId, month: Month, limit: Money, db_path: Path | None = None) -> None:
    """Set a category's limit for one month only.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT OR REPLACE INTO monthly_budgets (category, month, budget_limit) VALUES (?, ?, ?)",
                (category, month, limit),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def get_monthly_incomes(db_path: Path | None = None) -> list[MonthlyIncome]:
    """Get all per-month income records.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT month, amount FROM monthly_incomes ORDER BY month")
        return [MonthlyIncome(month=Month(row["month"]), amount=Money(row["amount"])) for row in cursor.fetchall()]


def set_monthly_income(month: Month, amount: Money, db_path: Path | None = None) -> None:
    """Set expected income for a month.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT OR REPLACE INTO monthly_incomes (month, amount) VALUES (?, ?)",
                (month, amount),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def insert_recurring(rule: RecurringTransaction, db_path: Path | None = None) -> int:
    """Insert a recurring transaction rule.

    Returns:
        ID of the new rule.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO recurring
                    (merchant, amount, type, category, frequency, start_date, next_due, last_generated, active)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    rule.merchant,
                    rule.amount,
                    rule.type.value,
                    rule.category.value,
                    rule.frequency.value,
                    rule.start_date,
                    rule.next_due,
                    rule.last_generated,
                    int(rule.active),
                ),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_recurring(db_path: Path | None = None) -> list[RecurringTransaction]:
    """Get all recurring rules ordered by next due date.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM recurring ORDER BY next_due, id")
        return [_row_to_recurring(row) for row in cursor.fetchall()]


def apply_recurring_run(
    generated: list[Transaction],
    updated: list[RecurringTransaction],
    db_path: Path | None = None,
) -> None:
    """Store generated transactions and advance their rules in one transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            for txn in generated:
                cursor.execute(
                    """
                    INSERT INTO transactions (merchant, date, amount, type, category, icon, source)
                    VALUES (?, ?, ?, ?, ?, ?, 'recurring')
                    """,
                    (txn.merchant, txn.date, txn.amount, txn.type.value, txn.category.value, txn.display_icon),
                )
            for rule in updated:
                cursor.execute(
                    "UPDATE recurring SET next_due = ?, last_generated = ?, active = ? WHERE id = ?",
                    (rule.next_due, rule.last_generated, int(rule.active), rule.id),
                )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def set_recurring_active(rule_id: int, active: bool, db_path: Path | None = None) -> bool:
    """Pause or resume a recurring rule.

    Returns:
        True if the rule exists and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("UPDATE recurring SET active = ? WHERE id = ?", (int(active), rule_id))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def _row_to_goal(row: sqlite3.Row) -> Goal:
    return Goal(
        id=row["id"],
        title=row["title"],
        current=Money(row["current_amount"]),
        target=Money(row["target_amount"]),
        monthly_contribution=Money(row["monthly_contribution"]),
    )


def insert_goal(goal: Goal, db_path: Path | None = None) -> int:
    """Insert a savings goal.

    Returns:
        ID of the new goal.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO goals (title, current_amount, target_amount, monthly_contribution)
                VALUES (?, ?, ?, ?)
                """,
                (goal.title, goal.current, goal.target, goal.monthly_contribution),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_goals(db_path: Path | None = None) -> list[Goal]:
    """Get all savings goals in creation order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM goals ORDER BY id")
        return [_row_to_goal(row) for row in cursor.fetchall()]


def get_goal(goal_id: int, db_path: Path | None = None) -> Goal | None:
    """Get one savings goal, or None if it does not exist.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM goals WHERE id = ?", (goal_id,))
        row = cursor.fetchone()
        return _row_to_goal(row) if row else None


def update_goal(goal: Goal, db_path: Path | None = None) -> bool:
    """Overwrite a stored goal with new values.

    Returns:
        True if the goal exists and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE goals
                SET title = ?, current_amount = ?, target_amount = ?, monthly_contribution = ?
                WHERE id = ?
                """,
                (goal.title, goal.current, goal.target, goal.monthly_contribution, goal.id),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_goal(goal_id: int, db_path: Path | None = None) -> bool:
    """Delete a savings goal.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM goals WHERE id = ?", (goal_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
