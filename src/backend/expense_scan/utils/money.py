"""
Money parsing for recognition output.

Handles two sources:
- Structured money values: units + nanos (billionths), optional currency code
- Free text: "RM 1,234.50", "$12.90", "S$5", "12.00 EUR"

Free text is matched against a priority-ordered currency table, the matched
symbol is removed, and the first number (with optional thousands commas)
is parsed.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple
import re

from expense_scan.models.receipt import MoneyValue


# Checked in order, first substring hit wins. Longer symbols come before
# the shorter ones they contain ("US$" and "S$" before "$").
CURRENCY_SYMBOLS: Tuple[Tuple[str, str], ...] = (
    ('US$', 'USD'),
    ('S$', 'SGD'),
    ('SGD', 'SGD'),
    ('RM', 'MYR'),
    ('MYR', 'MYR'),
    ('$', 'USD'),
    ('USD', 'USD'),
    ('€', 'EUR'),
    ('EUR', 'EUR'),
    ('£', 'GBP'),
    ('GBP', 'GBP'),
)

# Integer or decimal with optional thousands separators: 5, 12.90, 1,234.50
AMOUNT_PATTERN = re.compile(r'\d[\d,]*\.?\d*')

# Leading decimal number, as used for quantities ("2", "1.5 kg", "3x")
LEADING_NUMBER_PATTERN = re.compile(r'\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')

NANOS_PER_UNIT = 1e9


@dataclass(frozen=True)
class ParsedAmount:
    """Amount and currency resolved from a single detection."""
    amount: Optional[float] = None
    currency_code: Optional[str] = None


def detect_currency(text: str) -> Tuple[Optional[str], str]:
    """
    Find the first known currency symbol or code in text.

    Args:
        text: Raw amount text (e.g., "RM 1,234.50")

    Returns:
        (ISO currency code or None, text with the first occurrence of the
        matched symbol removed)

    Examples:
        >>> detect_currency("RM 1,234.50")
        ('MYR', ' 1,234.50')
        >>> detect_currency("12.90")
        (None, '12.90')
    """
    for symbol, code in CURRENCY_SYMBOLS:
        if symbol in text:
            return code, text.replace(symbol, '', 1)
    return None, text


def parse_amount(amount_str: Optional[str]) -> ParsedAmount:
    """
    Parse free-text money such as "RM 1,234.50" or "$12.90".

    Args:
        amount_str: Raw detection text

    Returns:
        ParsedAmount; amount is None when the text holds no number

    Examples:
        >>> parse_amount("RM 1,234.50")
        ParsedAmount(amount=1234.5, currency_code='MYR')
        >>> parse_amount("S$5")
        ParsedAmount(amount=5.0, currency_code='SGD')
    """
    if not amount_str or not isinstance(amount_str, str):
        return ParsedAmount()

    currency, cleaned = detect_currency(amount_str)

    match = AMOUNT_PATTERN.search(cleaned)
    if not match:
        return ParsedAmount(currency_code=currency)

    try:
        amount = float(Decimal(match.group(0).replace(',', '')))
    except (InvalidOperation, ValueError):
        amount = None

    return ParsedAmount(amount=amount, currency_code=currency)


def money_value_to_amount(money_value: MoneyValue) -> ParsedAmount:
    """
    Convert a structured money value to an amount.

    Missing units or nanos count as zero; {units: 45, nanos: 500000000}
    becomes 45.5. An empty currency code is treated as absent.
    """
    units = money_value.units or 0
    nanos = money_value.nanos or 0
    amount = units + nanos / NANOS_PER_UNIT

    currency = money_value.currency_code.strip().upper() if money_value.currency_code else None

    return ParsedAmount(amount=float(amount), currency_code=currency or None)


def resolve_money(mention_text: Optional[str], money_value: Optional[MoneyValue] = None) -> ParsedAmount:
    """Structured value when present, otherwise free-text parsing."""
    if money_value is not None:
        return money_value_to_amount(money_value)
    return parse_amount(mention_text)


def parse_quantity(text: Optional[str]) -> Optional[float]:
    """
    Parse the leading decimal number of a quantity detection.

    Unparsable text and a zero quantity both give None.
    """
    if not text:
        return None

    match = LEADING_NUMBER_PATTERN.match(text)
    if not match:
        return None

    try:
        quantity = float(match.group(1))
    except ValueError:
        return None

    return quantity or None
