"""Database schema initialization and default data."""

import os
import sqlite3
from pathlib import Path

from zenith.domain.models import TransactionCategory

# Standing monthly limits (in cents) seeded for a fresh database
DEFAULT_CATEGORY_LIMITS: dict[TransactionCategory, int] = {
    TransactionCategory.FOOD_AND_DRINK: 60000,
    TransactionCategory.TRANSPORT: 30000,
    TransactionCategory.SHOPPING: 40000,
    TransactionCategory.ENTERTAINMENT: 20000,
    TransactionCategory.HEALTH: 15000,
    TransactionCategory.BILLS: 120000,
    # Income categories don't usually have spending limits
    TransactionCategory.SALARY: 0,
    TransactionCategory.INVESTMENT: 0,
    TransactionCategory.FREELANCE: 0,
    TransactionCategory.OTHER: 20000,
}


def data_dir() -> Path:
    """Directory holding zenith's data, honouring XDG_DATA_HOME."""
    base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / "zenith"


def get_db_path() -> Path:
    """Default database location."""
    return data_dir() / "zenith.db"


def database_exists(db_path: Path | None = None) -> bool:
    return (db_path or get_db_path()).exists()


TABLES = [
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        icon TEXT NOT NULL,
        budget_limit INTEGER NOT NULL DEFAULT 0,
        order_index INTEGER NOT NULL DEFAULT 0,
        hidden INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        merchant TEXT NOT NULL,
        date TEXT NOT NULL,
        amount INTEGER NOT NULL,
        type TEXT NOT NULL,
        category TEXT NOT NULL,
        icon TEXT,
        source TEXT,
        created_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS monthly_budgets (
        category TEXT NOT NULL,
        month TEXT NOT NULL,
        budget_limit INTEGER NOT NULL,
        PRIMARY KEY (category, month)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS monthly_incomes (
        month TEXT PRIMARY KEY,
        amount INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recurring (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        merchant TEXT NOT NULL,
        amount INTEGER NOT NULL,
        type TEXT NOT NULL,
        category TEXT NOT NULL,
        frequency TEXT NOT NULL,
        start_date TEXT NOT NULL,
        next_due TEXT NOT NULL,
        last_generated TEXT,
        active INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS goals (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        current_amount INTEGER NOT NULL DEFAULT 0,
        target_amount INTEGER NOT NULL,
        monthly_contribution INTEGER NOT NULL DEFAULT 0
    )
    """,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date)",
    "CREATE INDEX IF NOT EXISTS idx_transactions_category ON transactions(category, date)",
    "CREATE INDEX IF NOT EXISTS idx_recurring_next_due ON recurring(next_due)",
]


def seed_categories(cursor: sqlite3.Cursor) -> None:
    """Insert the built-in categories if the table is empty."""
    cursor.execute("SELECT COUNT(*) FROM categories")
    if cursor.fetchone()[0] > 0:
        return

    cursor.executemany(
        "INSERT INTO categories (id, name, icon, budget_limit, order_index) VALUES (?, ?, ?, ?, ?)",
        [
            (category.value, category.value, category.icon, DEFAULT_CATEGORY_LIMITS[category], index)
            for index, category in enumerate(TransactionCategory)
        ],
    )


def init_database(db_path: Path | None = None) -> None:
    """Create tables and indexes, then seed the default categories.

    Safe to run against an existing database: nothing is dropped and
    categories are only seeded into an empty table.

    Args:
        db_path: Database file. If None, uses the default location.

    Raises:
        sqlite3.Error: If the schema cannot be created.
    """
    db_path = db_path or get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    try:
        for statement in TABLES + INDEXES:
            cursor.execute(statement)
        seed_categories(cursor)
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
