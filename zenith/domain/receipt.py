"""Pure functions for turning OCR'd receipt lines into a transaction guess.

This module contains the functional core for receipt scanning:
- No I/O operations (no camera, no OCR engine, no database)
- No side effects
- Single pass over the recognized text
- First match wins in every lookup table, so table order matters

All monetary amounts are in cents (Money type).
"""

import re

from zenith.domain.candidate import ParsedCandidate, ParseFailure, ParseResult, capitalize_words
from zenith.domain.models import Merchant, Money, TransactionCategory

FOOD = TransactionCategory.FOOD_AND_DRINK
TRANSPORT = TransactionCategory.TRANSPORT
SHOPPING = TransactionCategory.SHOPPING
ENTERTAINMENT = TransactionCategory.ENTERTAINMENT
HEALTH = TransactionCategory.HEALTH
BILLS = TransactionCategory.BILLS

UNKNOWN_MERCHANT = Merchant("Unknown Store")

# (lowercase substring, canonical merchant name, category)
MERCHANT_PATTERNS: list[tuple[str, str, TransactionCategory]] = [
    # Coffee & fast food
    ("starbucks", "Starbucks", FOOD),
    ("mcdonald", "McDonald's", FOOD),
    ("subway", "Subway", FOOD),
    ("dunkin", "Dunkin'", FOOD),
    ("chipotle", "Chipotle", FOOD),
    ("taco bell", "Taco Bell", FOOD),
    ("burger king", "Burger King", FOOD),
    ("wendy", "Wendy's", FOOD),
    ("chick-fil-a", "Chick-fil-A", FOOD),
    ("panera", "Panera Bread", FOOD),
    ("kfc", "KFC", FOOD),
    ("pizza hut", "Pizza Hut", FOOD),
    ("domino", "Domino's", FOOD),
    ("papa john", "Papa John's", FOOD),
    ("five guys", "Five Guys", FOOD),
    ("panda express", "Panda Express", FOOD),
    ("popeyes", "Popeyes", FOOD),
    ("sonic", "Sonic", FOOD),
    ("dairy queen", "Dairy Queen", FOOD),
    ("tim horton", "Tim Hortons", FOOD),
    # Grocery stores
    ("walmart", "Walmart", SHOPPING),
    ("target", "Target", SHOPPING),
    ("costco", "Costco", SHOPPING),
    ("whole foods", "Whole Foods", FOOD),
    ("trader joe", "Trader Joe's", FOOD),
    ("kroger", "Kroger", FOOD),
    ("safeway", "Safeway", FOOD),
    ("publix", "Publix", FOOD),
    ("aldi", "ALDI", FOOD),
    ("wegmans", "Wegmans", FOOD),
    ("heb", "H-E-B", FOOD),
    ("food lion", "Food Lion", FOOD),
    ("albertsons", "Albertsons", FOOD),
    ("sprouts", "Sprouts", FOOD),
    # Online & tech
    ("amazon", "Amazon", SHOPPING),
    ("apple", "Apple", SHOPPING),
    ("best buy", "Best Buy", SHOPPING),
    ("microsoft", "Microsoft", SHOPPING),
    ("ebay", "eBay", SHOPPING),
    # Gas & transport
    ("uber", "Uber", TRANSPORT),
    ("lyft", "Lyft", TRANSPORT),
    ("shell", "Shell Gas", TRANSPORT),
    ("chevron", "Chevron Gas", TRANSPORT),
    ("exxon", "Exxon", TRANSPORT),
    ("mobil", "Mobil", TRANSPORT),
    ("bp", "BP Gas", TRANSPORT),
    ("speedway", "Speedway", TRANSPORT),
    ("circle k", "Circle K", TRANSPORT),
    ("7-eleven", "7-Eleven", TRANSPORT),
    ("wawa", "Wawa", TRANSPORT),
    # Health & pharmacy
    ("cvs", "CVS Pharmacy", HEALTH),
    ("walgreens", "Walgreens", HEALTH),
    ("rite aid", "Rite Aid", HEALTH),
    ("pharmacy", "Pharmacy", HEALTH),
    ("doctor", "Doctor Visit", HEALTH),
    ("hospital", "Hospital", HEALTH),
    ("clinic", "Clinic", HEALTH),
    # Entertainment & subscriptions
    ("netflix", "Netflix", ENTERTAINMENT),
    ("spotify", "Spotify", ENTERTAINMENT),
    ("disney", "Disney+", ENTERTAINMENT),
    ("hulu", "Hulu", ENTERTAINMENT),
    ("hbo", "HBO Max", ENTERTAINMENT),
    ("youtube", "YouTube", ENTERTAINMENT),
    ("twitch", "Twitch", ENTERTAINMENT),
    ("amc", "AMC Theaters", ENTERTAINMENT),
    ("regal", "Regal Cinemas", ENTERTAINMENT),
    ("steam", "Steam", ENTERTAINMENT),
    ("playstation", "PlayStation", ENTERTAINMENT),
    ("xbox", "Xbox", ENTERTAINMENT),
    ("nintendo", "Nintendo", ENTERTAINMENT),
    # Retail & home
    ("home depot", "Home Depot", SHOPPING),
    ("ikea", "IKEA", SHOPPING),
    ("lowe", "Lowe's", SHOPPING),
    ("bed bath", "Bed Bath & Beyond", SHOPPING),
    ("macy", "Macy's", SHOPPING),
    ("nordstrom", "Nordstrom", SHOPPING),
    ("tjmaxx", "TJ Maxx", SHOPPING),
    ("marshalls", "Marshalls", SHOPPING),
    ("ross", "Ross", SHOPPING),
    ("sephora", "Sephora", SHOPPING),
    ("ulta", "Ulta Beauty", SHOPPING),
    ("nike", "Nike", SHOPPING),
    ("adidas", "Adidas", SHOPPING),
    ("gap", "Gap", SHOPPING),
    ("old navy", "Old Navy", SHOPPING),
    ("h&m", "H&M", SHOPPING),
    ("zara", "Zara", SHOPPING),
    ("uniqlo", "Uniqlo", SHOPPING),
    ("dollar tree", "Dollar Tree", SHOPPING),
    ("dollar general", "Dollar General", SHOPPING),
    ("family dollar", "Family Dollar", SHOPPING),
    # Utilities & bills
    ("electric", "Electric Bill", BILLS),
    ("water bill", "Water Bill", BILLS),
    ("internet", "Internet Bill", BILLS),
    ("phone bill", "Phone Bill", BILLS),
    ("insurance", "Insurance", BILLS),
    ("rent", "Rent", BILLS),
    ("mortgage", "Mortgage", BILLS),
]

CATEGORY_KEYWORDS: list[tuple[list[str], TransactionCategory]] = [
    (["restaurant", "cafe", "coffee", "food", "pizza", "burger", "sushi"], FOOD),
    (["grocery", "supermarket", "market"], FOOD),
    (["gas", "fuel", "parking", "taxi", "uber", "lyft", "transit"], TRANSPORT),
    (["pharmacy", "hospital", "clinic", "medical", "health"], HEALTH),
    (["movie", "cinema", "theater", "concert", "game"], ENTERTAINMENT),
    (["electric", "water", "internet", "phone", "utility"], BILLS),
    (["store", "shop", "mall", "retail", "clothing"], SHOPPING),
]

# Optional label, optional "$", then 1-6 integer digits and exactly 2 fraction digits
AMOUNT_PATTERN = re.compile(
    r"(?:total|amount|due|charge|subtotal)?[:\s]*\$?\s*(\d{1,6}[.,]\d{2})",
    re.IGNORECASE,
)

DATE_PATTERNS = [
    re.compile(r"\d{1,2}/\d{1,2}/\d{2,4}"),
    re.compile(r"\d{1,2}-\d{1,2}-\d{2,4}"),
    re.compile(r"\d{4}-\d{2}-\d{2}"),
]


def contains_date(text: str) -> bool:
    """Check whether text contains a date-shaped token.

    Args:
        text: Text to check.

    Returns:
        True if text matches D/D/Y, D-D-Y or Y-M-D digit patterns.
    """
    return any(pattern.search(text) for pattern in DATE_PATTERNS)


def match_merchant(haystack: str) -> tuple[Merchant, TransactionCategory] | None:
    """Find the first known merchant mentioned in the receipt text.

    Args:
        haystack: Lowercased receipt text.

    Returns:
        Tuple of (merchant, category) for the first matching table entry, or None.
    """
    for pattern, name, category in MERCHANT_PATTERNS:
        if pattern in haystack:
            return Merchant(name), category
    return None


def guess_merchant_from_lines(lines: list[str]) -> Merchant:
    """Use the first significant line as the merchant name.

    A line is significant when it is longer than 3 characters, has no "$"
    and does not look like a date.

    Args:
        lines: OCR'd receipt lines.

    Returns:
        Capitalized merchant name, or "Unknown Store" if no line qualifies.
    """
    for line in lines:
        trimmed = line.strip()
        if len(trimmed) > 3 and "$" not in trimmed and not contains_date(trimmed):
            return Merchant(capitalize_words(trimmed))
    return UNKNOWN_MERCHANT


def parse_amount_token(token: str) -> Money:
    """Convert a "12.34" or "12,34" token to cents.

    Args:
        token: Amount token with exactly two fraction digits.

    Returns:
        Amount in cents.
    """
    normalized = token.replace(",", ".")
    whole, fraction = normalized.split(".")
    return Money(int(whole) * 100 + int(fraction))


def extract_amounts(lines: list[str]) -> list[Money]:
    """Collect every currency-shaped token from each line independently.

    Args:
        lines: OCR'd receipt lines.

    Returns:
        List of amounts in cents, in reading order.
    """
    amounts: list[Money] = []
    for line in lines:
        for match in AMOUNT_PATTERN.finditer(line):
            amounts.append(parse_amount_token(match.group(1)))
    return amounts


def detect_category(haystack: str) -> TransactionCategory:
    """Pick a category from keyword groups.

    Args:
        haystack: Lowercased text to scan.

    Returns:
        Category of the first keyword group with a hit, or OTHER.
    """
    for keywords, category in CATEGORY_KEYWORDS:
        for keyword in keywords:
            if keyword in haystack:
                return category
    return TransactionCategory.OTHER


def parse_receipt(lines: list[str]) -> ParseResult:
    """Turn OCR'd receipt lines into a best-guess transaction.

    The largest currency-shaped figure is taken as the total, since receipts
    list subtotal, tax and total and the total is usually the largest.

    Args:
        lines: Recognized text lines, in any order.

    Returns:
        Tuple of (candidate, failure). Exactly one is None.
    """
    haystack = " ".join(lines).lower()

    known = match_merchant(haystack)
    if known is not None:
        merchant, category = known
    else:
        merchant = guess_merchant_from_lines(lines)
        category = TransactionCategory.OTHER

    amounts = extract_amounts(lines)
    amount = max(amounts, default=Money(0))
    if amount <= 0:
        return None, ParseFailure.AMOUNT_NOT_FOUND

    if category == TransactionCategory.OTHER:
        category = detect_category(haystack)

    return (
        ParsedCandidate(
            merchant=merchant,
            amount=amount,
            category=category,
            raw_text="\n".join(lines),
        ),
        None,
    )
