import pytest

from pcn_editor.core.parsers import parse_file
from pcn_editor.core.search import find_by_record_and_entity, find_by_record_number


@pytest.fixture
def receipts(delimited_file):
    return parse_file(delimited_file, "delimited").receipts


def test_shared_receipt_number_returns_both(receipts):
    found = find_by_record_number(receipts, "14")
    assert [r.entity_id for r in found] == ["424673351", "514567890"]


def test_query_leading_zeros_ignored(receipts):
    assert find_by_record_number(receipts, "00014") == find_by_record_number(receipts, "14")


def test_no_match_is_not_an_error(receipts):
    assert find_by_record_number(receipts, "15") == []


def test_zero_query_matches_zero_receipt_number():
    row = "R42467335120251102000000719+0000012345000000001"
    receipts = parse_file(row, "delimited").receipts
    assert find_by_record_number(receipts, "000") == receipts


def test_record_and_entity(receipts):
    match = find_by_record_and_entity(receipts, "14", "514567890")
    assert match is not None
    assert match.source_line_number == 3


def test_record_and_entity_needs_both(receipts):
    assert find_by_record_and_entity(receipts, "99", "514567890") is None
    assert find_by_record_and_entity(receipts, "14", "999999999") is None


def test_record_and_entity_first_duplicate_wins(delimited_file):
    duplicated = delimited_file + delimited_file
    receipts = parse_file(duplicated, "delimited").receipts
    match = find_by_record_and_entity(receipts, "014", "424673351")
    assert match.sequence_index == 0


def test_entity_id_compared_exactly(receipts):
    assert find_by_record_and_entity(receipts, "14", "24673351") is None
