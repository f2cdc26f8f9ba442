"""
ADIF Encoder (Document -> .adi text).

Each field is written as <NAME:LENGTH[:T]>value where LENGTH is the byte
length of the serialized value, measured after serialization. A type
indicator is only written when the parser could not infer the same
datatype from the field name alone, so output always parses back to an
equal Document.

Supports two layouts:
    - COMPACT: no whitespace at all, <EOH><CALL:6>N0CALL<EOR>
    - LINES: one field per line, a blank line after each record
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Sequence

from adifkit.decoder import resolve_type
from adifkit.model import Document, FieldBlock, canonical_name
from adifkit.values import (
    FieldValue,
    Text,
    Number,
    Date,
    Time,
    Boolean,
    Enumeration,
)


class EncodeLayout(Enum):
    """Whitespace layouts for encoded output."""
    COMPACT = "compact"  # Everything on one line
    LINES = "lines"      # One field per line


def _format_number(number: Decimal) -> str:
    """Shortest plain decimal form: 14, -3.5, 0.001 (never exponent notation)."""
    if number == number.to_integral_value():
        return str(int(number))
    return format(number.normalize(), "f")


def _format_time(value: datetime.time, has_seconds: bool) -> str:
    if has_seconds or value.second:
        return f"{value.hour:02d}{value.minute:02d}{value.second:02d}"
    return f"{value.hour:02d}{value.minute:02d}"


def serialize_value(value: FieldValue) -> str:
    """
    Convert a typed value to its wire text (the inverse of decode_value).

    Args:
        value: Any FieldValue

    Returns:
        Value text, without tag
    """
    if isinstance(value, (Text, Enumeration)):
        return value.value
    if isinstance(value, Boolean):
        return "Y" if value.value else "N"
    if isinstance(value, Number):
        return _format_number(value.value)
    if isinstance(value, Date):
        d = value.value
        return f"{d.year:04d}{d.month:02d}{d.day:02d}"
    if isinstance(value, Time):
        return _format_time(value.value, value.has_seconds)
    raise TypeError(f"Unsupported FieldValue type: {type(value)}")


def encode_field(
    name: str,
    value: FieldValue,
    type_indicators: bool = False,
    encoding: str = "utf-8",
) -> str:
    """
    Encode a single field as <NAME:LENGTH[:T]>value.

    Args:
        name: Field name (any case)
        value: Typed value
        type_indicators: Write the indicator for every non-text value,
            not only where it is needed to preserve the type
        encoding: Encoding used to measure LENGTH

    Returns:
        Encoded field text
    """
    name = canonical_name(name)
    text = serialize_value(value)
    length = len(text.encode(encoding))

    indicator = ""
    inferred = resolve_type(name)
    if inferred != value.data_type or (type_indicators and not isinstance(value, Text)):
        indicator = f":{value.data_type.indicator}"

    return f"<{name}:{length}{indicator}>{text}"


def _ordered_names(block: FieldBlock, field_order: Sequence[str]) -> List[str]:
    """Names from field_order that are present, then the rest in insertion order."""
    first = [canonical_name(n) for n in field_order]
    first = [n for i, n in enumerate(first) if n in block.fields and n not in first[:i]]
    return first + [n for n in block.fields if n not in first]


def _encode_block(
    block: FieldBlock,
    marker: str,
    field_order: Sequence[str],
    layout: EncodeLayout,
    type_indicators: bool,
    encoding: str,
) -> str:
    parts = [
        encode_field(name, block.fields[name], type_indicators, encoding)
        for name in _ordered_names(block, field_order)
    ]
    parts.append(marker)
    if layout == EncodeLayout.LINES:
        return "\n".join(parts) + "\n"
    return "".join(parts)


def encode(
    document: Document,
    field_order: Optional[Sequence[str]] = None,
    layout: EncodeLayout = EncodeLayout.COMPACT,
    preamble: Optional[str] = None,
    type_indicators: bool = False,
    encoding: str = "utf-8",
) -> str:
    """
    Generate .adi text for a document.

    Args:
        document: Document to encode (not modified)
        field_order: Names to write first in every header and record;
            other fields follow in insertion order
        layout: Whitespace layout (COMPACT, LINES)
        preamble: Free text written before the header, must not contain '<'
        type_indicators: Always write indicators for non-text values
        encoding: Encoding used to measure field lengths

    Returns:
        String containing the encoded document

    Raises:
        ValueError: If the preamble contains '<'
    """
    field_order = field_order or ()
    blocks = []

    if preamble is not None:
        if "<" in preamble:
            raise ValueError("Preamble must not contain '<'")
        blocks.append(preamble + "\n" if layout == EncodeLayout.LINES else preamble)

    blocks.append(
        _encode_block(document.header, "<EOH>", field_order, layout, type_indicators, encoding)
    )
    for record in document.records:
        blocks.append(
            _encode_block(record, "<EOR>", field_order, layout, type_indicators, encoding)
        )

    if layout == EncodeLayout.LINES:
        return "\n".join(blocks)
    return "".join(blocks)


def save_adi_file(
    document: Document,
    filename: str,
    encoding: str = "utf-8",
    **options,
) -> None:
    """
    Encode a document and save it to a file.

    The file is written as bytes so that newlines inside values are not
    translated, which would invalidate their lengths.

    Args:
        document: Document to save
        filename: Output file path (.adi extension recommended)
        encoding: File encoding, also used to measure field lengths
        **options: Passed on to encode()
    """
    text = encode(document, encoding=encoding, **options)
    with open(filename, "wb") as f:
        f.write(text.encode(encoding))


__all__ = [
    "EncodeLayout",
    "serialize_value",
    "encode_field",
    "encode",
    "save_adi_file",
]
