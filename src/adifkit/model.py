"""
Core ADIF Document Objects

Defines the data structures produced by the parser and consumed by
the encoder:
    - Header (program / format metadata)
    - Record (one logged contact)
    - Document (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about tags, lengths or byte offsets
        - Are never mutated by the parser or encoder once returned
        - Hold typed FieldValues only (see adifkit.values)
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from adifkit.values import FieldValue, ValueLike, as_field_value


RESERVED_NAMES = ("EOH", "EOR")


def canonical_name(name: str) -> str:
    """Field names are case-insensitive; the canonical form is upper case."""
    return name.upper()


def _check_name(name: str) -> str:
    if not name or not name.isascii() or any(c in "<>:," or c.isspace() for c in name):
        raise ValueError(f"Invalid field name: {name!r}")
    if name in RESERVED_NAMES:
        raise ValueError(f"{name} is a marker, not a field name")
    return name


@dataclass
class FieldBlock:
    """
    Mapping from canonical field name to typed value.

    Shared by Header and Record.

    Properties:
        fields:
            Insertion-ordered dict of name -> FieldValue.
            Keys are canonicalised and bare strings are wrapped as Text
            on construction, so ``Record({"call": "W1AW"})`` works.

    Equality ignores insertion order.
    """

    fields: Dict[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self):
        self.fields = {
            _check_name(canonical_name(name)): as_field_value(value)
            for name, value in self.fields.items()
        }

    def get_field(self, name: str) -> Optional[FieldValue]:
        """
        Retrieve a field by name (any case).

        Returns:
            FieldValue or None if not present
        """
        return self.fields.get(canonical_name(name))

    def names(self) -> List[str]:
        return list(self.fields)

    def items(self) -> List[Tuple[str, FieldValue]]:
        return list(self.fields.items())

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[canonical_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass
class Header(FieldBlock):
    """
    Document header: adapter / program metadata.

    Examples of fields: ADIF_VER, PROGRAMID, PROGRAMVERSION, CREATED_TIMESTAMP.
    May be empty; a document without <EOH> has an empty header.
    """


@dataclass
class Record(FieldBlock):
    """
    One logged contact (QSO).

    Field names are unique within a record. When a document repeats a
    tag inside one record, the parser keeps the last value.
    """


@dataclass
class Document:
    """
    Root container for a parsed or hand-built ADIF log.

    Properties:
        header: Header (possibly empty)
        records: Records in document order (possibly empty)

    INVARIANTS:
        - A document with zero records is valid
        - Records produced by the parser are never empty
    """

    header: Header = field(default_factory=Header)
    records: List[Record] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)


__all__ = [
    "canonical_name",
    "Header",
    "Record",
    "Document",
]
