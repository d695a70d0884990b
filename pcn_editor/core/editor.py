# pcn_editor/core/editor.py
import logging

from .errors import FieldFormatError, InvalidAllocation, LineNotFound, NotARecordLine
from .layouts import get_layout
from .parsers import BOM, WHITESPACE, split_lines, trim_line
from .services.validator import is_digits

logger = logging.getLogger(__name__)


def detect_line_ending(content: str) -> str:
    """CRLF for the whole file if it appears anywhere, LF otherwise."""
    return "\r\n" if "\r\n" in content else "\n"


def replace_allocation(raw_line: str, new_allocation: str, layout) -> str:
    """
    Rewrite the allocation number of one row.

    Offsets come from the trimmed row, so leading and trailing padding of the
    original line survive untouched. A row the parser would reject is not
    touched either, so the new value can never spill into another field.
    """
    layout = get_layout(layout)
    line = trim_line(raw_line)
    if not layout.is_record_line(line) or len(line) < layout.min_length:
        raise NotARecordLine("line is not a valid receipt row")
    try:
        layout.extract(line, 0, 0)
    except FieldFormatError as e:
        raise NotARecordLine(f"line is not a valid receipt row ({e.field})") from e

    lead = len(raw_line) - len(raw_line.lstrip(WHITESPACE))
    start, end = layout.allocation_span(line)
    return raw_line[:lead + start] + new_allocation + raw_line[lead + end:]


def update_allocation(content: str, line_number: int, new_allocation: str, layout) -> str:
    """
    Return a copy of the file with the allocation number on line_number
    (1-based) replaced. Every other byte is kept as is.

    Raises:
        InvalidAllocation, LineNotFound, NotARecordLine
    """
    if not is_digits(new_allocation, 9):
        raise InvalidAllocation("Allocation number must be exactly 9 digits")

    lines = split_lines(content)
    index = line_number - 1
    if index < 0 or index >= len(lines):
        raise LineNotFound(f"Line {line_number} not found in file")

    try:
        lines[index] = replace_allocation(lines[index], new_allocation, layout)
    except NotARecordLine:
        raise NotARecordLine(f"Line {line_number} is not a valid receipt row") from None

    logger.info("Allocation on line %d set to %s", line_number, new_allocation)

    prefix = BOM if content.startswith(BOM) else ""
    return prefix + detect_line_ending(content).join(lines)
