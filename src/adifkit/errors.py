"""Errors and warnings raised by the ADIF parser."""

from typing import Optional


class AdifError(Exception):
    """Base error for this package."""


class AdifParseError(AdifError):
    """
    Raised when an ADIF document cannot be parsed.

    Every parse error aborts the whole parse. ``offset`` is the byte
    offset of the offending tag when it is known.
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class TagSyntaxError(AdifParseError):
    """Raised when a tag is malformed (bad length, missing '>', empty name)."""


class TruncatedValueError(AdifParseError):
    """Raised when a tag declares more bytes than remain in the input."""


class UnexpectedEndOfInputError(AdifParseError):
    """Raised when input ends inside a record that was never closed by <EOR>."""


class MisplacedMarkerError(AdifParseError):
    """Raised when an <EOH> marker follows records that were already closed."""


class InvalidFieldValueError(AdifParseError):
    """
    Raised when a value does not match the grammar of its datatype.

    Properties:
        name: Canonical field name
        expected_type: Name of the datatype the value was decoded as
        raw: The raw value bytes from the document
    """

    def __init__(
        self,
        name: str,
        expected_type: str,
        raw: bytes,
        reason: str = "",
        offset: Optional[int] = None,
    ):
        self.name = name
        self.expected_type = expected_type
        self.raw = raw
        self.reason = reason
        message = f"Invalid {expected_type} value for {name}: {raw!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, offset)

    def with_offset(self, offset: int) -> "InvalidFieldValueError":
        """Return a copy of this error located at ``offset``."""
        return InvalidFieldValueError(self.name, self.expected_type, self.raw, self.reason, offset)


class AdifWarning(UserWarning):
    """Issued for input that is tolerated but probably not intended."""
