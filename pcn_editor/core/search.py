# pcn_editor/core/search.py
from typing import Iterable, List, Optional

from .models import Receipt
from .services.validator import strip_leading_zeros


def find_by_record_number(receipts: Iterable[Receipt], query: str) -> List[Receipt]:
    """All receipts with this receipt number, in file order. Leading zeros are ignored."""
    wanted = strip_leading_zeros(query)
    return [r for r in receipts if r.record_number == wanted]


def find_by_record_and_entity(
    receipts: Iterable[Receipt], query: str, entity_id: str
) -> Optional[Receipt]:
    """
    The receipt matching both the receipt number and the 9-digit business number.

    The pair is expected to be unique within a file but this is not checked;
    with duplicates the first one in file order wins.
    """
    wanted = strip_leading_zeros(query)
    return next(
        (r for r in receipts if r.record_number == wanted and r.entity_id == entity_id),
        None,
    )
