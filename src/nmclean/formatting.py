"""Human-readable byte formatting for nmclean."""

from decimal import ROUND_HALF_UP, Decimal

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")
KILO = 1024


def format_bytes(size_bytes: int, decimals: int = 2) -> str:
    """
    Format a byte count using binary (1024-based) units.

    The value is rounded half-up to ``decimals`` places and trailing zeros
    are dropped, so 1536 renders as "1.5 KB", 1152 as "1.13 KB" and
    1048576 as "1 MB". Values past the last unit keep growing in TB.

    Args:
        size_bytes: Non-negative byte count
        decimals: Maximum number of decimal places (negative means 0)

    Returns:
        Formatted size string
    """
    if size_bytes < 0:
        raise ValueError(f"size_bytes must be non-negative, got {size_bytes}")
    if size_bytes == 0:
        return "0 Bytes"

    places = max(decimals, 0)

    # floor(log1024(n)) without float log error
    index = 0
    while index < len(SIZE_UNITS) - 1 and size_bytes >= KILO ** (index + 1):
        index += 1

    value = Decimal(size_bytes) / Decimal(KILO**index)
    value = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    return f"{text} {SIZE_UNITS[index]}"
