# pcn_editor/core/errors.py
"""Exceptions raised by the receipt parser and editor."""


class PcnError(Exception):
    """Base error for this package."""


class FieldFormatError(PcnError):
    """A candidate row failed validation on one of its fields."""

    def __init__(self, field, reason):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class InvalidAllocation(PcnError, ValueError):
    """The new allocation number is not exactly 9 digits."""


class LineNotFound(PcnError, LookupError):
    """The requested line number is outside the file."""


class NotARecordLine(PcnError):
    """The addressed line is not a receipt row under the active layout."""


class UnknownLayout(PcnError, ValueError):
    """No layout is registered under the requested name."""


class NoRecordsFound(PcnError):
    """A parse produced no receipts."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(self.errors[0] if self.errors else "No valid receipt rows found in file")
