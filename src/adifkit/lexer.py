"""
Lexer for ADIF documents (Layer 1: raw bytes -> tag tokens).

Tag syntax:
    <NAME:LENGTH>value          field with LENGTH bytes of value
    <NAME:LENGTH:T>value        field with explicit type indicator T
    <EOH> / <EOR>               end-of-header / end-of-record markers

Scanning Notes:
    - Text between a value and the next '<' is ignored
    - The value is exactly LENGTH bytes; it is never trimmed or unescaped,
      so '<' and '>' may appear inside it
    - Names and type indicators are upper-cased here and nowhere else
    - Lengths and offsets count bytes, not characters

If a producer writes a wrong LENGTH the following tags are misread.
The format has no way to detect this; the lexer does not try.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from adifkit.errors import TagSyntaxError, TruncatedValueError


class TokenKind(Enum):
    FIELD = "field"
    END_OF_HEADER = "eoh"
    END_OF_RECORD = "eor"


MARKERS = {
    "EOH": TokenKind.END_OF_HEADER,
    "EOR": TokenKind.END_OF_RECORD,
}


@dataclass(frozen=True)
class Token:
    """
    One scanned tag.

    Properties:
        kind: FIELD or one of the two markers
        name: Canonical (upper case) tag name
        type_hint: Upper case type indicator, "" when absent
        value: Raw value bytes (empty for markers)
        offset: Byte offset of the opening '<'
    """

    kind: TokenKind
    name: str
    type_hint: str = ""
    value: bytes = b""
    offset: int = 0


def _split_tag(body: bytes, offset: int) -> list:
    """Split a tag body on ':' after checking it is printable ASCII."""
    try:
        text = body.decode("ascii")
    except UnicodeDecodeError:
        raise TagSyntaxError(f"Tag contains non-ASCII characters: {body!r}", offset)

    parts = text.split(":")
    if not parts[0] or any(c in "<," or c.isspace() for c in parts[0]):
        raise TagSyntaxError(f"Invalid tag name in <{text}>", offset)
    if len(parts) > 3:
        raise TagSyntaxError(f"Too many ':' separators in <{text}>", offset)
    return parts


def tokenize(data: Union[str, bytes], encoding: str = "utf-8") -> Iterator[Token]:
    """
    Lazily scan ``data`` and yield one Token per tag, in document order.

    Args:
        data: Complete document as bytes, or as str (encoded with ``encoding``)
        encoding: Used only when ``data`` is a str

    Yields:
        Token objects

    Raises:
        TagSyntaxError: On a malformed or unterminated tag
        TruncatedValueError: If a value runs past the end of the input
    """
    if isinstance(data, str):
        data = data.encode(encoding)

    size = len(data)
    pos = 0

    while True:
        start = data.find(b"<", pos)
        if start < 0:
            return

        end = data.find(b">", start + 1)
        if end < 0:
            raise TagSyntaxError("Unterminated tag", start)

        parts = _split_tag(data[start + 1:end], start)
        name = parts[0].upper()

        if len(parts) == 1:
            if name not in MARKERS:
                raise TagSyntaxError(f"Tag <{parts[0]}> has no length", start)
            yield Token(kind=MARKERS[name], name=name, offset=start)
            pos = end + 1
            continue

        if name in MARKERS:
            raise TagSyntaxError(f"Marker <{name}> cannot carry a length", start)

        length_text = parts[1]
        if not length_text or not all("0" <= c <= "9" for c in length_text):
            raise TagSyntaxError(f"Invalid length {length_text!r} in tag <{parts[0]}>", start)
        length = int(length_text)

        type_hint = parts[2].upper() if len(parts) == 3 else ""

        value_start = end + 1
        value_end = value_start + length
        if value_end > size:
            raise TruncatedValueError(
                f"Tag <{name}> declares {length} bytes but only {size - value_start} remain",
                start,
            )

        yield Token(
            kind=TokenKind.FIELD,
            name=name,
            type_hint=type_hint,
            value=data[value_start:value_end],
            offset=start,
        )
        pos = value_end


__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
]
