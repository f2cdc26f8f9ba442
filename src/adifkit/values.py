"""
Field Values for ADIF documents

Every field in a header or record carries exactly one typed value.
The value types form a closed, tagged variant over the primitive
datatypes of the format:

    - Text          raw string, never interpreted
    - Number        integer or decimal
    - Date          calendar date, YYYYMMDD on the wire
    - Time          time of day, HHMM or HHMMSS on the wire
    - Boolean       Y / N
    - Enumeration   enumerated code, kept as text

ARCHITECTURAL RULE:
    Values are immutable and know nothing about tags, lengths or
    encodings. Wire conversion lives in the decoder and encoder.
"""

import datetime
from abc import ABC
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Dict, Union


class DataType(Enum):
    """
    Canonical datatypes understood by the core.

    The enum value is the single-letter type indicator written in a tag,
    e.g. ``<QSO_DATE:8:D>``. Text has the indicator ``S``.
    """

    TEXT = "S"
    NUMBER = "N"
    DATE = "D"
    TIME = "T"
    BOOLEAN = "B"
    ENUMERATION = "E"

    @property
    def indicator(self) -> str:
        return self.value


# Indicator letters accepted on input. Several string-like indicators
# (international, multiline, location) all collapse onto TEXT.
TYPE_INDICATORS: Dict[str, DataType] = {
    "S": DataType.TEXT,
    "I": DataType.TEXT,
    "M": DataType.TEXT,
    "G": DataType.TEXT,
    "L": DataType.TEXT,
    "N": DataType.NUMBER,
    "D": DataType.DATE,
    "T": DataType.TIME,
    "B": DataType.BOOLEAN,
    "E": DataType.ENUMERATION,
    # spelled-out forms written by some generators
    "STRING": DataType.TEXT,
    "TEXT": DataType.TEXT,
    "NUMBER": DataType.NUMBER,
    "DATE": DataType.DATE,
    "TIME": DataType.TIME,
    "BOOLEAN": DataType.BOOLEAN,
    "ENUMERATION": DataType.ENUMERATION,
}


def _check_text(value: str) -> None:
    # lone surrogates cannot be written in any encoding
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError(f"Text is not encodable: {value!r}") from None


class FieldValue(ABC):
    """
    Base class for all typed field values.

    Structure only. Subclasses set ``data_type`` and hold a single
    ``value`` attribute.
    """

    data_type: ClassVar[DataType]


@dataclass(frozen=True)
class Text(FieldValue):
    """
    Free text, stored verbatim.

    Examples:
        - "W1AW"
        - "3.1.4"
        - "Nice QSO <3"
    """

    data_type: ClassVar[DataType] = DataType.TEXT

    value: str

    def __post_init__(self):
        _check_text(self.value)


@dataclass(frozen=True)
class Number(FieldValue):
    """
    Integer or decimal number.

    Stored as a Decimal so that values survive a round trip without
    binary floating point drift. Callers may pass int, float or str;
    they are coerced on construction.

    Examples:
        - Number(14)        -> 14
        - Number("14.074")  -> 14.074
        - Number(-3.5)      -> -3.5
    """

    data_type: ClassVar[DataType] = DataType.NUMBER

    value: Decimal

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            raw = self.value
            if isinstance(raw, float):
                raw = repr(raw)
            object.__setattr__(self, "value", Decimal(raw))
        if not self.value.is_finite():
            raise ValueError(f"Number must be finite, got {self.value}")


@dataclass(frozen=True)
class Date(FieldValue):
    """Calendar date (UTC), YYYYMMDD on the wire."""

    data_type: ClassVar[DataType] = DataType.DATE

    value: datetime.date

    def __post_init__(self):
        if isinstance(self.value, datetime.datetime):
            object.__setattr__(self, "value", self.value.date())


@dataclass(frozen=True)
class Time(FieldValue):
    """
    Time of day (UTC).

    Properties:
        value: datetime.time, no tzinfo, no microseconds
        has_seconds:
            Whether the wire form carried seconds (HHMMSS) or not (HHMM).
            Only controls the encoded width; it does not take part in
            equality, so 1230 and 123000 are the same time.
    """

    data_type: ClassVar[DataType] = DataType.TIME

    value: datetime.time
    has_seconds: bool = field(default=True, compare=False)

    def __post_init__(self):
        if self.value.microsecond or self.value.tzinfo is not None:
            raise ValueError(f"Time must have no microseconds or tzinfo, got {self.value!r}")


@dataclass(frozen=True)
class Boolean(FieldValue):
    data_type: ClassVar[DataType] = DataType.BOOLEAN

    value: bool


@dataclass(frozen=True)
class Enumeration(FieldValue):
    """
    Enumerated code such as a band ("20M") or mode ("SSB").

    IMPORTANT:
        The code is NOT checked against any registry.
        Unknown codes are preserved as-is.
    """

    data_type: ClassVar[DataType] = DataType.ENUMERATION

    value: str

    def __post_init__(self):
        _check_text(self.value)


ValueLike = Union[FieldValue, str]


def as_field_value(value: ValueLike) -> FieldValue:
    """Wrap bare strings as Text; pass FieldValues through."""
    if isinstance(value, FieldValue):
        return value
    if isinstance(value, str):
        return Text(value)
    raise TypeError(f"Unsupported field value type: {type(value)}")
