"""
adifkit: ADIF (.adi) Parser and Encoder

Reads and writes the length-prefixed, tagged-field text format used to
exchange contact logs between logging programs.

    <ADIF_VER:5>3.1.4<EOH>
    <CALL:4>W1AW<QSO_DATE:8>20230115<TIME_ON:4>1230<EOR>

ARCHITECTURAL GUARANTEE:
------------------------
This package works on complete in-memory documents only.
Parsing and encoding are pure functions with no shared state.

It does NOT:
    - Read the XML variant (.adx)
    - Validate field names or enumeration codes against the registry

Unknown fields are kept as text and written back unchanged.
"""

from adifkit.errors import (
    AdifError,
    AdifParseError,
    AdifWarning,
    InvalidFieldValueError,
    MisplacedMarkerError,
    TagSyntaxError,
    TruncatedValueError,
    UnexpectedEndOfInputError,
)
from adifkit.values import (
    DataType,
    FieldValue,
    Text,
    Number,
    Date,
    Time,
    Boolean,
    Enumeration,
)
from adifkit.model import Document, Header, Record
from adifkit.parser import parse, parse_file
from adifkit.encoder import EncodeLayout, encode, save_adi_file

__version__ = "0.1.0"

__all__ = [
    "AdifError",
    "AdifParseError",
    "AdifWarning",
    "InvalidFieldValueError",
    "MisplacedMarkerError",
    "TagSyntaxError",
    "TruncatedValueError",
    "UnexpectedEndOfInputError",
    "DataType",
    "FieldValue",
    "Text",
    "Number",
    "Date",
    "Time",
    "Boolean",
    "Enumeration",
    "Document",
    "Header",
    "Record",
    "parse",
    "parse_file",
    "EncodeLayout",
    "encode",
    "save_adi_file",
]
