"""Pure functions for short spending insights.

Two flavours:
- Local advice computed from a month's BudgetAggregate
- The prompt sent to the remote AI insight service
"""

from zenith.domain.budget import BudgetAggregate, top_spending_category
from zenith.domain.models import Money, Transaction, format_money

RECENT_TRANSACTION_COUNT = 5

SYSTEM_PROMPT = "You are a helpful financial assistant."


def spent_percentage(total_spent: Money, total_budget: Money) -> int:
    """Whole percentage of the budget spent (0 when there is no budget)."""
    if total_budget <= 0:
        return 0
    return int(total_spent / total_budget * 100)


def spending_advice(aggregate: BudgetAggregate) -> str:
    """One-line advice for the planner.

    Args:
        aggregate: Planner figures for the month.

    Returns:
        Advice text.
    """
    percent = spent_percentage(aggregate.total_spent, aggregate.total_budget)
    top = top_spending_category(aggregate)
    top_name = top.name if top else "Unknown"

    if percent > 80:
        return f"⚠️ You've used {percent}% of your budget. Watch {top_name}!"
    if percent > 50:
        return f"📊 {percent}% spent. {top_name} is your top category."
    if aggregate.total_spent == 0:
        return "🎯 No spending tracked yet this month. Add transactions to see insights!"
    return f"✅ On track! Only {percent}% of budget used so far."


def calculate_balance(transactions: list[Transaction]) -> Money:
    """Net of all signed transaction amounts."""
    return Money(sum(t.amount for t in transactions))


def build_insight_prompt(transactions: list[Transaction]) -> str:
    """Build the user prompt for the remote AI insight.

    Args:
        transactions: Transactions, newest first.

    Returns:
        Prompt text describing balance and recent transactions.
    """
    balance = calculate_balance(transactions)
    recent = ", ".join(
        f"{t.merchant} ({format_money(t.amount)})" for t in transactions[:RECENT_TRANSACTION_COUNT]
    )

    return (
        "You are an advanced financial AI assistant named Zenith.\n"
        "Analyze the following user data:\n"
        f"- Current Balance: {format_money(balance)}\n"
        f"- Recent Transactions: {recent}\n"
        "\n"
        "Provide a single, short, insightful sentence about their finances.\n"
        "Focus on saving opportunities, spending trends, or positive reinforcement.\n"
        "Keep it strictly under 15 words.\n"
        'Start with "AI Insight:".'
    )
