# pcn_editor/core/__init__.py
from .editor import update_allocation
from .errors import (
    FieldFormatError,
    InvalidAllocation,
    LineNotFound,
    NoRecordsFound,
    NotARecordLine,
    PcnError,
    UnknownLayout,
)
from .layouts import DelimitedLayout, FixedWidthLayout, get_layout
from .models import Issue, ParseOutcome, Receipt
from .parsers import ReceiptParser, parse_file
from .search import find_by_record_and_entity, find_by_record_number
