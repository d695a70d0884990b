# pcn_editor/core/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import NoRecordsFound

INVALID_ROW_MESSAGE = "Invalid receipt row format"
NO_ROWS_MESSAGE = "No valid receipt rows found in file"


@dataclass(frozen=True)
class Receipt:
    """
    One receipt row of a PCN874 file.

    - sequence_index: position among receipt rows (0-based)
    - source_line_number: physical line in the file (1-based)
    - raw_text: the line exactly as it appeared, padding included
    """
    sequence_index: int
    source_line_number: int
    raw_text: str
    kind: str
    entity_id: str
    year: int
    month: int
    day: int
    record_number: str
    record_number_padded: str
    tax_amount: int
    net_amount: int
    allocation_code: str
    extra_code: Optional[str] = None

    @property
    def date(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)


@dataclass(frozen=True)
class Issue:
    line_no: Optional[int]
    message: str
    code: str = "invalid_row"
    field: Optional[str] = None

    def __str__(self):
        if self.line_no is None:
            return self.message
        return f"Line {self.line_no}: {self.message}"

    def to_dict(self):
        return {
            "line_no": self.line_no,
            "code": self.code,
            "field": self.field,
            "message": str(self),
        }


@dataclass
class ParseOutcome:
    layout: str
    receipts: List[Receipt] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)
    line_map: Dict[int, int] = field(default_factory=dict)

    @property
    def errors(self) -> List[str]:
        return [str(issue) for issue in self.issues]

    @property
    def has_receipts(self) -> bool:
        return bool(self.receipts)

    def receipt_at(self, sequence_index: int) -> Optional[Receipt]:
        if 0 <= sequence_index < len(self.receipts):
            return self.receipts[sequence_index]
        return None

    def ensure_receipts(self) -> "ParseOutcome":
        if not self.receipts:
            raise NoRecordsFound(self.errors)
        return self
