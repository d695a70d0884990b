import re

from ..errors import FieldFormatError

# Only ASCII digits; str.isdigit() also accepts other numeral scripts
DIGITS = re.compile(r"[0-9]+")


def is_digits(value: str, width: int | None = None) -> bool:
    if not DIGITS.fullmatch(value or ""):
        return False
    return width is None or len(value) == width


def strip_leading_zeros(value: str) -> str:
    """
    Normalize a zero-padded number for comparison.

    "0006394" -> "6394", "000" -> "0". Applying it twice is a no-op.
    """
    return value.lstrip("0") or "0"


def pad_allocation(value: str, width: int = 9) -> str:
    """Left-pad a user-entered allocation number (1 to 9 digits) with zeros."""
    value = (value or "").strip()
    if not is_digits(value) or len(value) > width:
        raise ValueError(f"Allocation number must be 1 to {width} digits")
    return value.zfill(width)


def digits_field(line: str, field: str, start: int, width: int) -> str:
    """Slice a fixed-width numeric field, raising FieldFormatError on mismatch."""
    value = line[start:start + width]
    if not is_digits(value, width):
        raise FieldFormatError(field, f"expected {width} digits at offset {start}, got {value!r}")
    return value


def ranged_int(value: str, field: str, low: int, high: int) -> int:
    number = int(value, 10)
    if number < low or number > high:
        raise FieldFormatError(field, f"{number} outside {low}..{high}")
    return number
