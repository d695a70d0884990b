# pcn_editor/core/layouts/delimited.py
import re

from ..errors import FieldFormatError
from ..services.validator import digits_field, is_digits
from .base import ALLOCATION_WIDTH, SEPARATOR, RowLayout

ROW_MARKER = re.compile(r"[A-Z]")
HEADER_END = 18
TAX_WIDTH = 9
NET_WIDTH = 10
# 1 (type) + 9 (business) + 4 (year) + 2 (month) + 2 (day) + 9 (tax) + 1 (+) + 10 (net) + 9 (allocation)
MIN_ROW_LENGTH = 47


class DelimitedLayout(RowLayout):
    """
    Variable width rows anchored on the '+' separator:

    R424673351202511020014000000000000000719+0000000000000000000
    kind|entity_id|yyyy|mm|dd|record(0-padded, any width)|tax(9)|+|net(10)|...|allocation(9)

    Tax is the 9 characters before '+', net the 10 after it, the allocation
    number is always the last 9 characters and the receipt number fills the
    gap between the date and the tax amount.
    """
    id = "delimited"
    description = "Delimited ('+' anywhere, allocation in the last 9 characters)"
    min_length = MIN_ROW_LENGTH

    def is_record_line(self, line: str) -> bool:
        return bool(ROW_MARKER.match(line)) and SEPARATOR in line

    def allocation_span(self, line):
        return len(line) - ALLOCATION_WIDTH, len(line)

    def _extract_body(self, line):
        plus_index = line.find(SEPARATOR)
        if plus_index == -1:
            raise FieldFormatError("separator", "no '+' in row")

        tax_start = plus_index - TAX_WIDTH
        if tax_start < HEADER_END:
            raise FieldFormatError("tax_amount", f"'+' at offset {plus_index} leaves no room for the tax amount")
        tax_amount = digits_field(line, "tax_amount", tax_start, TAX_WIDTH)

        record_number = line[HEADER_END:tax_start]
        if record_number and not is_digits(record_number):
            raise FieldFormatError("record_number", f"non-digit characters in {record_number!r}")

        net_amount = digits_field(line, "net_amount", plus_index + 1, NET_WIDTH)

        allocation_start, _ = self.allocation_span(line)
        if allocation_start < plus_index + 1 + NET_WIDTH:
            raise FieldFormatError("allocation_code", "overlaps the net amount")
        allocation_code = digits_field(line, "allocation_code", allocation_start, ALLOCATION_WIDTH)

        return {
            "record_number": record_number,
            "tax_amount": tax_amount,
            "net_amount": net_amount,
            "allocation_code": allocation_code,
        }
