"""Decimal helpers for monetary values.

Amounts are accumulated unrounded and only quantized to paise when a value is
handed out for display or storage.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

PAISE = Decimal("0.01")
ZERO = Decimal("0")

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten",
    "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


def to_decimal(value) -> Decimal:
    """Convert DB/JSON values (None, int, float, str, Decimal) to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}")


def round_money(value) -> Decimal:
    return to_decimal(value).quantize(PAISE, rounding=ROUND_HALF_UP)


def _words(num: int) -> str:
    if num == 0:
        return "Zero"

    crore, num = divmod(num, 10_000_000)
    lakh, num = divmod(num, 100_000)
    thousand, num = divmod(num, 1000)
    hundred, num = divmod(num, 100)

    parts: list[str] = []
    if crore:
        parts.append(f"{_words(crore)} Crore")
    if lakh:
        parts.append(f"{_words(lakh)} Lakh")
    if thousand:
        parts.append(f"{_words(thousand)} Thousand")
    if hundred:
        parts.append(f"{_ONES[hundred]} Hundred")
    if num >= 20:
        parts.append(_TENS[num // 10])
        if num % 10:
            parts.append(_ONES[num % 10])
    elif num:
        parts.append(_ONES[num])
    return " ".join(parts)


def amount_in_words(amount) -> str:
    """Indian-numbering words for an invoice total.

    >>> amount_in_words(Decimal("125000.50"))
    'Indian Rupee One Lakh Twenty Five Thousand and Fifty Paise Only'
    """
    value = round_money(amount)
    rupees = int(value)
    paise = int((value - rupees) * 100)

    result = f"Indian Rupee {_words(rupees)}"
    if paise > 0:
        result += f" and {_words(paise)} Paise"
    return result + " Only"
