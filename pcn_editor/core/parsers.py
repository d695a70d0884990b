# pcn_editor/core/parsers.py
import logging
from typing import List

from .errors import FieldFormatError
from .layouts import RowLayout, get_layout
from .models import INVALID_ROW_MESSAGE, NO_ROWS_MESSAGE, Issue, ParseOutcome

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# ASCII and unicode whitespace, without the \x1c-\x1f separators str.strip() also drops
WHITESPACE = (
    " \t\n\v\f\r\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def normalize_line_endings(content: str) -> str:
    """Drop a leading BOM and turn CRLF / bare CR into LF."""
    if content.startswith(BOM):
        content = content[len(BOM):]
    return content.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(content: str) -> List[str]:
    # str.splitlines() would also break on form feeds and unicode separators
    return normalize_line_endings(content).split("\n")


def trim_line(line: str) -> str:
    return line.strip(WHITESPACE)


class ReceiptParser:
    def __init__(self, layout):
        self.layout: RowLayout = get_layout(layout)

    def parse(self, content: str) -> ParseOutcome:
        outcome = ParseOutcome(layout=self.layout.id)

        for line_no, raw in enumerate(split_lines(content), start=1):
            line = trim_line(raw)
            if not line:
                continue
            # headers, footers and other record types are not errors
            if not self.layout.is_candidate_line(line):
                continue

            try:
                receipt = self.layout.extract(
                    line,
                    sequence_index=len(outcome.receipts),
                    line_number=line_no,
                    raw_text=raw,
                )
            except FieldFormatError as e:
                logger.debug("Line %d rejected on %s: %s", line_no, e.field, e.reason)
                outcome.issues.append(Issue(line_no, INVALID_ROW_MESSAGE, field=e.field))
                continue

            outcome.line_map[receipt.sequence_index] = line_no
            outcome.receipts.append(receipt)

        if not outcome.receipts and not outcome.issues:
            outcome.issues.append(Issue(None, NO_ROWS_MESSAGE, code="no_rows"))

        logger.info(
            "Parsed %d receipts (%d invalid rows) with layout %s",
            len(outcome.receipts), len(outcome.issues), self.layout.id,
        )
        return outcome


def parse_file(content: str, layout) -> ParseOutcome:
    return ReceiptParser(layout).parse(content)
