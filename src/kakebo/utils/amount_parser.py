"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "¥1,200"

    Amounts are magnitudes: the transaction type carries the direction, so
    signs and parentheses are rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols and thousands separators
    cleaned = re.sub(r"[$€£¥]", "", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got '{amount_str}'")
    return amount


def parse_percentages(value: str) -> list[float]:
    """Parse a comma-separated list of percentages, e.g. "25,50,75%".

    Raises:
        ValueError: If any entry is not a number
    """
    percentages = []
    for part in value.split(","):
        part = part.strip().rstrip("%").strip()
        if not part:
            continue
        try:
            percentages.append(float(part))
        except ValueError:
            raise ValueError(f"Could not parse percentage '{part}'")
    return percentages
