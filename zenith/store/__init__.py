"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from zenith.store.export import export_transactions_csv
from zenith.store.queries import (
    add_category,
    apply_recurring_run,
    delete_goal,
    delete_transaction,
    get_category_budgets,
    get_goal,
    get_goals,
    get_monthly_incomes,
    get_monthly_overrides,
    get_recurring,
    get_transactions,
    insert_goal,
    insert_recurring,
    insert_transaction,
    set_category_hidden,
    set_category_limit,
    set_monthly_income,
    set_monthly_override,
    set_recurring_active,
    update_goal,
)
from zenith.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "add_category",
    "apply_recurring_run",
    "delete_goal",
    "delete_transaction",
    "get_category_budgets",
    "get_goal",
    "get_goals",
    "get_monthly_incomes",
    "get_monthly_overrides",
    "get_recurring",
    "get_transactions",
    "insert_goal",
    "insert_recurring",
    "insert_transaction",
    "set_category_hidden",
    "set_category_limit",
    "set_monthly_income",
    "set_monthly_override",
    "set_recurring_active",
    "update_goal",
    # Export
    "export_transactions_csv",
]
