"""CSV export of transactions."""

from pathlib import Path

import pandas as pd

from zenith.domain.models import Transaction

EXPORT_COLUMNS = ["Date", "Merchant", "Amount", "Type", "Category"]


def transactions_to_frame(transactions: list[Transaction]) -> pd.DataFrame:
    """Build the export table.

    Commas in merchant names become semicolons so the file stays readable by
    naive CSV consumers.

    Args:
        transactions: Transactions to export.

    Returns:
        DataFrame with the export columns, amounts in dollars as "0.00" strings.
    """
    rows = [
        {
            "Date": txn.date,
            "Merchant": txn.merchant.replace(",", ";"),
            "Amount": f"{txn.amount / 100:.2f}",
            "Type": txn.type.value,
            "Category": txn.category.value,
        }
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_transactions_csv(transactions: list[Transaction], output_path: Path) -> int:
    """Write transactions to a CSV file.

    Args:
        transactions: Transactions to export.
        output_path: Destination file; parent directories are created.

    Returns:
        Number of rows written.

    Raises:
        OSError: If the file cannot be written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame = transactions_to_frame(transactions)
    frame.to_csv(output_path, index=False)
    return len(frame)
