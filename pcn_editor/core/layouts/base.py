# pcn_editor/core/layouts/base.py
from __future__ import annotations

from typing import Optional, Tuple

from ..errors import FieldFormatError
from ..models import Receipt
from ..services.validator import digits_field, ranged_int, strip_leading_zeros

SEPARATOR = "+"
ALLOCATION_WIDTH = 9


class RowLayout:
    """
    A way of reading receipt rows out of a PCN874 file.

    Subclasses decide which lines are candidate rows (is_record_line) and where
    the variable part of a row sits (_extract_body). The first 18 characters
    are shared by every layout:

        kind(0) entity_id(1-9) year(10-13) month(14-15) day(16-17)
    """
    id: str = ""
    description: str = ""
    min_length: int = 0

    def is_record_line(self, line: str) -> bool:
        raise NotImplementedError

    def is_candidate_line(self, line: str) -> bool:
        """
        Lines that look like receipt rows. A candidate that fails extraction is
        reported as an error; anything else is skipped silently.
        """
        return self.is_record_line(line)

    def allocation_span(self, line: str) -> Tuple[int, int]:
        """Start/end offsets of the allocation number inside a trimmed row."""
        raise NotImplementedError

    def _extract_body(self, line: str) -> dict:
        raise NotImplementedError

    def extract(
        self,
        line: str,
        sequence_index: int,
        line_number: int,
        raw_text: Optional[str] = None,
    ) -> Receipt:
        """
        Build a Receipt from a trimmed candidate row.

        Fields are checked in order and the first failure raises
        FieldFormatError; nothing is returned for a partially valid row.
        """
        if len(line) < self.min_length:
            raise FieldFormatError("length", f"{len(line)} characters, need at least {self.min_length}")

        entity_id = digits_field(line, "entity_id", 1, 9)
        year = ranged_int(digits_field(line, "year", 10, 4), "year", 1900, 2100)
        month = ranged_int(digits_field(line, "month", 14, 2), "month", 1, 12)
        day = ranged_int(digits_field(line, "day", 16, 2), "day", 1, 31)

        body = self._extract_body(line)

        return Receipt(
            sequence_index=sequence_index,
            source_line_number=line_number,
            raw_text=line if raw_text is None else raw_text,
            kind=line[0],
            entity_id=entity_id,
            year=year,
            month=month,
            day=day,
            record_number=strip_leading_zeros(body["record_number"]),
            record_number_padded=body["record_number"],
            tax_amount=int(body["tax_amount"], 10),
            net_amount=int(body["net_amount"], 10),
            allocation_code=body["allocation_code"],
            extra_code=body.get("extra_code"),
        )

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}>"
