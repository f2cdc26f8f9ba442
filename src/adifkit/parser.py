"""
ADIF Parser (raw text -> Document).

Pipeline:
    tokenize()      bytes -> Token stream          (adifkit.lexer)
    decode_value()  Token -> typed FieldValue      (adifkit.decoder)
    DocumentAssembler  fields + markers -> Document

Assembly policy:
    - Every field upserts into one pending mapping (last write wins)
    - <EOH> moves the pending fields into the Header; later <EOH> markers
      are ignored with an AdifWarning
    - <EOR> closes a Record; an <EOR> with nothing pending is ignored
    - Input that ends with pending fields is an error

There is no lenient mode: the first error aborts the parse.
"""

import os
import warnings
from typing import Dict, List, Optional, Union

from adifkit.decoder import decode_value
from adifkit.errors import (
    AdifWarning,
    InvalidFieldValueError,
    MisplacedMarkerError,
    UnexpectedEndOfInputError,
)
from adifkit.lexer import TokenKind, tokenize
from adifkit.model import Document, Header, Record
from adifkit.values import FieldValue


class DocumentAssembler:
    """
    Groups decoded fields into a header and records.

    Usage:
        assembler = DocumentAssembler()
        assembler.add_field("CALL", Text("W1AW"))
        assembler.end_of_record()
        document = assembler.finish()
    """

    def __init__(self):
        self._pending: Dict[str, FieldValue] = {}
        self._header: Optional[Header] = None
        self._records: List[Record] = []

    @property
    def header_locked(self) -> bool:
        return self._header is not None

    def add_field(self, name: str, value: FieldValue) -> None:
        # dict assignment keeps the original position of a repeated name
        self._pending[name] = value

    def end_of_header(self, offset: Optional[int] = None) -> None:
        if self.header_locked:
            warnings.warn(
                f"Ignoring redundant <EOH> at byte {offset}", AdifWarning, stacklevel=2
            )
            return
        if self._records:
            raise MisplacedMarkerError("<EOH> found after the first record", offset)
        self._header = Header(self._pending)
        self._pending = {}

    def end_of_record(self, offset: Optional[int] = None) -> None:
        if not self._pending:
            return
        self._records.append(Record(self._pending))
        self._pending = {}

    def finish(self, offset: Optional[int] = None) -> Document:
        """
        Close the document.

        Raises:
            UnexpectedEndOfInputError: If fields are pending without <EOR>
        """
        if self._pending:
            names = ", ".join(self._pending)
            raise UnexpectedEndOfInputError(
                f"Input ended inside an unterminated record ({names})", offset
            )
        return Document(header=self._header or Header(), records=self._records)


def parse(data: Union[str, bytes], encoding: str = "utf-8") -> Document:
    """
    Parse a complete ADIF document held in memory.

    Args:
        data: Document text, or raw bytes as read from an .adi file
        encoding: Character encoding of the values (default UTF-8)

    Returns:
        Document

    Raises:
        TagSyntaxError: Malformed tag
        TruncatedValueError: Value runs past the end of input
        InvalidFieldValueError: Value does not match its datatype
        MisplacedMarkerError: <EOH> after records
        UnexpectedEndOfInputError: Last record not closed by <EOR>
    """
    if isinstance(data, str):
        data = data.encode(encoding)

    assembler = DocumentAssembler()

    for token in tokenize(data):
        if token.kind == TokenKind.FIELD:
            try:
                value = decode_value(token.name, token.type_hint, token.value, encoding)
            except InvalidFieldValueError as e:
                raise e.with_offset(token.offset) from None
            assembler.add_field(token.name, value)
        elif token.kind == TokenKind.END_OF_HEADER:
            assembler.end_of_header(token.offset)
        elif token.kind == TokenKind.END_OF_RECORD:
            assembler.end_of_record(token.offset)

    return assembler.finish(len(data))


def parse_file(filepath: str, encoding: str = "utf-8") -> Document:
    """
    Parse an .adi file into a Document.

    Args:
        filepath: Path to the .adi file
        encoding: Character encoding of the file

    Returns:
        Document

    Raises:
        FileNotFoundError: If file doesn't exist
        AdifParseError: If parsing fails
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"ADIF file not found: {filepath}")

    with open(filepath, "rb") as f:
        content = f.read()

    return parse(content, encoding=encoding)


__all__ = [
    "DocumentAssembler",
    "parse",
    "parse_file",
]
