from __future__ import annotations


class RecnormError(Exception):
    """Base class for everything this package raises on purpose."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class EncodingError(RecnormError):
    """Invalid text in a field. Never raised: the field validator substitutes instead."""


class RowFormatError(RecnormError):
    """Wrong field count or malformed quoting on an input row."""


class NormalizationError(RecnormError):
    """A normalization rule could not be applied to a record."""


class TimestampParseError(NormalizationError):
    pass


class DurationParseError(NormalizationError):
    pass


class WriteError(RecnormError):
    """An output row could not be written."""


class StartupError(RecnormError):
    """The process cannot start, e.g. time zone data is missing."""
