# pcn_editor/core/serializers.py
from .models import Issue, Receipt


def serialize_receipt(receipt: Receipt) -> dict:
    return {
        "row_index": receipt.sequence_index,
        "line_number": receipt.source_line_number,
        "raw_row": receipt.raw_text,
        "row_type": receipt.kind,
        "business_number": receipt.entity_id,
        "year": receipt.year,
        "month": receipt.month,
        "day": receipt.day,
        "receipt_number": receipt.record_number,
        "receipt_number_padded": receipt.record_number_padded,
        "vat_amount": receipt.tax_amount,
        "sum_without_vat": receipt.net_amount,
        "allocation_number": receipt.allocation_code,
        "extra_code": receipt.extra_code,
        "display": format_receipt_for_display(receipt),
    }


def _agorot(amount: int) -> str:
    shekels, agorot = divmod(amount, 100)
    return f"{shekels}.{agorot:02d}"


def format_receipt_for_display(receipt: Receipt) -> dict:
    """Amounts are stored in agorot; shown in shekels with two decimals."""
    return {
        "business_number": receipt.entity_id,
        "date": f"{receipt.year:04d}-{receipt.month:02d}-{receipt.day:02d}",
        "receipt_number": receipt.record_number,
        "vat_amount": _agorot(receipt.tax_amount),
        "sum_without_vat": _agorot(receipt.net_amount),
        "allocation_number": receipt.allocation_code,
    }


def serialize_issue(issue: Issue) -> dict:
    return issue.to_dict()
