"""Pure functions for turning a spoken phrase into a transaction guess.

Handles phrases like "I spent 15 dollars at Starbucks" or "25 bucks on lunch".
Only finalized transcriptions are parsed; live partial results are a display
concern of the caller.
"""

import re
from decimal import Decimal

from zenith.domain.candidate import ParsedCandidate, ParseFailure, ParseResult, capitalize_words
from zenith.domain.models import Merchant, Money, TransactionCategory

UNKNOWN_MERCHANT = Merchant("Unknown")

# Tried in order; the first pattern that matches anywhere wins
AMOUNT_PATTERNS = [
    re.compile(r"(\d+(?:\.\d{1,2})?)\s*(?:dollars?|bucks?|\$)", re.IGNORECASE),
    re.compile(r"\$\s*(\d+(?:\.\d{1,2})?)", re.IGNORECASE),
    re.compile(r"spent\s*(\d+(?:\.\d{1,2})?)", re.IGNORECASE),
    re.compile(r"(\d+(?:\.\d{1,2})?)\s*(?:on|at|for)", re.IGNORECASE),
]

MERCHANT_MARKERS = [" at ", " on "]
MERCHANT_MAX_WORDS = 3

CATEGORY_KEYWORDS: list[tuple[list[str], TransactionCategory]] = [
    (
        ["food", "lunch", "dinner", "breakfast", "coffee", "restaurant"],
        TransactionCategory.FOOD_AND_DRINK,
    ),
    (["uber", "lyft", "taxi", "gas", "transport"], TransactionCategory.TRANSPORT),
    (["shopping", "store", "amazon"], TransactionCategory.SHOPPING),
    (["movie", "netflix", "entertainment"], TransactionCategory.ENTERTAINMENT),
]


def extract_spoken_amount(text: str) -> Money | None:
    """Find the spoken amount.

    Args:
        text: Lowercased transcription.

    Returns:
        Amount in cents, or None if no pattern matched.
    """
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if match:
            return Money(int(Decimal(match.group(1)) * 100))
    return None


def extract_spoken_merchant(text: str) -> Merchant:
    """Take up to three words after " at " (or else " on ") as the merchant.

    Args:
        text: Lowercased transcription.

    Returns:
        Capitalized merchant guess, or "Unknown".
    """
    for marker in MERCHANT_MARKERS:
        index = text.find(marker)
        if index == -1:
            continue
        after = text[index + len(marker) :]
        words = after.split(" ")[:MERCHANT_MAX_WORDS]
        merchant = capitalize_words(" ".join(words))
        return Merchant(merchant) if merchant.strip() else UNKNOWN_MERCHANT
    return UNKNOWN_MERCHANT


def detect_spoken_category(text: str) -> TransactionCategory:
    """Pick a category from the spoken keyword groups.

    Args:
        text: Lowercased transcription.

    Returns:
        Category of the first keyword group with a hit, or OTHER.
    """
    for keywords, category in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return TransactionCategory.OTHER


def parse_voice(text: str) -> ParseResult:
    """Turn a finalized transcription into a best-guess transaction.

    Args:
        text: Transcribed utterance.

    Returns:
        Tuple of (candidate, failure). Both are None for empty input, since
        there is nothing to complain about yet.
    """
    lowered = text.lower()

    amount = extract_spoken_amount(lowered)
    if amount is None or amount <= 0:
        if text:
            return None, ParseFailure.AMOUNT_NOT_UNDERSTOOD
        return None, None

    return (
        ParsedCandidate(
            merchant=extract_spoken_merchant(lowered),
            amount=amount,
            category=detect_spoken_category(lowered),
        ),
        None,
    )
