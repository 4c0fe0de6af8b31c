"""Display-string formatting for the calculator buffer."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from pocket_calculator.core.tokens import POINT


def split_buffer(buffer: str) -> tuple[str, str | None]:
    """Split a buffer into its integer and fraction parts.

    Args:
        buffer: Display buffer, e.g. "12", "12." or "12.5"

    Returns:
        (integer part, fraction part). The fraction part is None when the
        buffer has no decimal point and "" when it ends with one.
    """
    if POINT not in buffer:
        return buffer, None
    integer, fraction = buffer.split(POINT, 1)
    return integer, fraction


def integer_digits(buffer: str) -> int:
    """Count the digits of the integer part, ignoring any sign."""
    integer, _ = split_buffer(buffer)
    return len(integer.lstrip("-+"))


def format_display(buffer: str, max_fraction_digits: int) -> str:
    """Format a buffer for display.

    The integer part is grouped with thousands separators. The fraction
    shows the digits present in the buffer, capped at max_fraction_digits
    and never padded. A buffer ending in a bare point keeps the point.

    Args:
        buffer: Display buffer
        max_fraction_digits: Most fraction digits to show

    Returns:
        Formatted string, e.g. "12,345.5" or "12."

    Examples:
        >>> format_display("12345678901234", 3)
        '12,345,678,901,234'
        >>> format_display("1234.50", 3)
        '1,234.50'
        >>> format_display("12.", 3)
        '12.'
    """
    _, fraction = split_buffer(buffer)
    places = min(max_fraction_digits, len(fraction)) if fraction else 0

    value = Decimal(buffer)
    if places < len(fraction or ""):
        value = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)

    text = format(value, f",.{places}f")
    if text.startswith("-") and value.is_zero():
        text = text[1:]
    if buffer.endswith(POINT):
        text += POINT
    return text


def normalize_result(value: Decimal) -> str:
    """Render a computed value as a buffer string.

    Trailing fractional zeros are stripped, and the point with them when
    no fraction remains. Zero always renders as "0".
    """
    if value.is_zero():
        return "0"
    text = format(value, "f")
    if POINT in text:
        text = text.rstrip("0").rstrip(POINT)
    return text
