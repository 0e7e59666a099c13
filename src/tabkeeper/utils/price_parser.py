"""Price parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_price(price_str: str) -> Decimal:
    """Parse a price string into a Decimal rounded to cents.

    Handles various formats:
    - "12.5"
    - "$12.50"
    - "1,234.56"
    - "€ 3"

    Args:
        price_str: Price string

    Returns:
        Decimal price with two decimal places

    Raises:
        ValueError: If the string cannot be parsed or is negative
    """
    if not price_str or not price_str.strip():
        raise ValueError("Empty price string")

    cleaned = re.sub(r"[$€£¥]", "", price_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        price = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse price '{price_str}'")

    if not price.is_finite():
        raise ValueError(f"Could not parse price '{price_str}'")
    if price < 0:
        raise ValueError(f"Price must not be negative: '{price_str}'")
    return price.quantize(Decimal("0.01"))
