# pcn_editor/core/layouts/fixed_width.py
from ..errors import FieldFormatError
from ..services.validator import digits_field
from .base import ALLOCATION_WIDTH, SEPARATOR, RowLayout

ROW_LENGTH = 60
SEPARATOR_OFFSET = 40
ALLOCATION_OFFSET = 51


class FixedWidthLayout(RowLayout):
    """
    Strict 60-character rows with absolute offsets:

    T000719567202511160006000006394000004576+0000025424000006394
    kind|entity_id|yyyy|mm|dd|extra(4)|record(9)|tax(9)|+|net(10)|allocation(9)
    """
    id = "fixed"
    description = "Fixed width (60 characters, '+' at position 41)"
    min_length = ROW_LENGTH

    def __init__(self, marker: str = "T"):
        if len(marker) != 1:
            raise ValueError("marker must be a single character")
        self.marker = marker

    def is_record_line(self, line: str) -> bool:
        return (
            len(line) == ROW_LENGTH
            and line.startswith(self.marker)
            and line[SEPARATOR_OFFSET] == SEPARATOR
        )

    def is_candidate_line(self, line: str) -> bool:
        # truncated or padded rows still count so they get reported
        return line.startswith(self.marker) and SEPARATOR in line

    def allocation_span(self, line):
        return ALLOCATION_OFFSET, ALLOCATION_OFFSET + ALLOCATION_WIDTH

    def _extract_body(self, line):
        if len(line) != ROW_LENGTH:
            raise FieldFormatError("length", f"{len(line)} characters, expected {ROW_LENGTH}")

        extra_code = digits_field(line, "extra_code", 18, 4)
        record_number = digits_field(line, "record_number", 22, 9)
        tax_amount = digits_field(line, "tax_amount", 31, 9)
        if line[SEPARATOR_OFFSET] != SEPARATOR:
            raise FieldFormatError("separator", f"expected '+' at offset {SEPARATOR_OFFSET}")
        net_amount = digits_field(line, "net_amount", 41, 10)
        allocation_code = digits_field(line, "allocation_code", ALLOCATION_OFFSET, ALLOCATION_WIDTH)

        return {
            "extra_code": extra_code,
            "record_number": record_number,
            "tax_amount": tax_amount,
            "net_amount": net_amount,
            "allocation_code": allocation_code,
        }
