"""Parse results shared by the receipt and voice parsers."""

import re
from dataclasses import dataclass
from enum import Enum

from zenith.domain.models import Merchant, Money, Transaction, TransactionCategory, TransactionType


class ParseFailure(str, Enum):
    """Why a parser could not produce a candidate.

    The value is the message shown to the user before asking them to retry.
    """

    AMOUNT_NOT_FOUND = "Could not find amount on receipt"
    AMOUNT_NOT_UNDERSTOOD = 'Could not understand amount. Try: "I spent 15 dollars at Starbucks"'


@dataclass(frozen=True)
class ParsedCandidate:
    """Best-guess transaction extracted from OCR or speech text."""

    merchant: Merchant
    amount: Money  # always positive
    category: TransactionCategory = TransactionCategory.OTHER
    raw_text: str = ""

    def to_transaction(self, date: str) -> Transaction:
        """Build the expense transaction the user confirmed.

        Args:
            date: Transaction date (YYYY-MM-DD).

        Returns:
            Expense Transaction with a negative amount.
        """
        return Transaction(
            merchant=self.merchant,
            date=date,
            amount=Money(-abs(self.amount)),
            type=TransactionType.EXPENSE,
            category=self.category,
        )


ParseResult = tuple[ParsedCandidate | None, ParseFailure | None]

_WORD = re.compile(r"\S+")


def capitalize_words(text: str) -> str:
    """Uppercase the first letter of each word and lowercase the rest.

    Whitespace between words is preserved as-is.

    Args:
        text: Text to capitalize.

    Returns:
        Capitalized text (e.g., "joe's DINER" -> "Joe's Diner").
    """
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)
