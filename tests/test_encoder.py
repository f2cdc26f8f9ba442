"""
Tests for the ADIF encoder (Document -> .adi text).

Verifies:
    - Exact output for simple documents
    - Value serialization for every datatype
    - Type indicators only where needed
    - Length tags match the bytes that follow
    - Round-trip and idempotence through the parser
"""

import datetime
import re
from decimal import Decimal

import pytest
from adifkit.encoder import (
    EncodeLayout,
    encode,
    encode_field,
    save_adi_file,
    serialize_value,
)
from adifkit.examples import build_example_log
from adifkit.model import Document, Header, Record
from adifkit.parser import parse, parse_file
from adifkit.values import Text, Number, Date, Time, Boolean, Enumeration


TAG = re.compile(rb"<([^:>]+):(\d+)(?::[^>]*)?>")


def declared_lengths_match(data: bytes) -> bool:
    """Walk the output tag by tag, checking each declared length."""
    pos = 0
    while True:
        match = TAG.search(data, pos)
        if match is None:
            return True
        length = int(match.group(2))
        value = data[match.end():match.end() + length]
        if len(value) != length:
            return False
        pos = match.end() + length


class TestSerializeValue:
    """Serialization is the inverse of decoding."""

    def test_text(self):
        assert serialize_value(Text("W1AW")) == "W1AW"

    def test_enumeration(self):
        assert serialize_value(Enumeration("20M")) == "20M"

    def test_boolean(self):
        assert serialize_value(Boolean(True)) == "Y"
        assert serialize_value(Boolean(False)) == "N"

    def test_date(self):
        assert serialize_value(Date(datetime.date(2020, 2, 24))) == "20200224"

    def test_time_with_seconds(self):
        assert serialize_value(Time(datetime.time(23, 2, 5))) == "230205"

    def test_time_without_seconds(self):
        assert serialize_value(Time(datetime.time(9, 5), has_seconds=False)) == "0905"

    def test_time_keeps_nonzero_seconds(self):
        assert serialize_value(Time(datetime.time(9, 5, 1), has_seconds=False)) == "090501"

    @pytest.mark.parametrize("value,expected", [
        (Decimal("3.5"), "3.5"),
        (Decimal("-3.5"), "-3.5"),
        (Decimal("-12.0"), "-12"),
        (Decimal("1E+2"), "100"),
        (Decimal("14.07400"), "14.074"),
        (Decimal("0.001"), "0.001"),
        (15.5, "15.5"),
        (7, "7"),
    ])
    def test_number(self, value, expected):
        assert serialize_value(Number(value)) == expected


class TestEncodeField:

    def test_text(self):
        assert encode_field("test", Text("Hello, world!")) == "<TEST:13>Hello, world!"

    def test_inferred_types_have_no_indicator(self):
        assert encode_field("QSO_DATE", Date(datetime.date(2023, 1, 15))) == "<QSO_DATE:8>20230115"
        assert encode_field("MODE", Enumeration("SSB")) == "<MODE:3>SSB"

    def test_indicator_for_unknown_field(self):
        assert encode_field("APP_X", Boolean(True)) == "<APP_X:1:B>Y"
        assert encode_field("APP_X", Number(-3.5)) == "<APP_X:4:N>-3.5"
        assert encode_field("APP_X", Enumeration("SSB")) == "<APP_X:3:E>SSB"

    def test_text_in_typed_field(self):
        assert encode_field("QSO_DATE", Text("soon")) == "<QSO_DATE:4:S>soon"

    def test_always_indicators(self):
        date = Date(datetime.date(2023, 1, 15))
        assert encode_field("QSO_DATE", date, type_indicators=True) == "<QSO_DATE:8:D>20230115"
        assert encode_field("CALL", Text("W1AW"), type_indicators=True) == "<CALL:4>W1AW"

    def test_length_is_bytes(self):
        assert encode_field("NAME", Text("Jörg")) == "<NAME:5>Jörg"
        assert encode_field("NAME", Text("Jörg"), encoding="latin-1") == "<NAME:4>Jörg"


class TestEncode:

    def test_empty_header_one_record(self):
        doc = Document(header=Header(), records=[Record({"CALL": Text("N0CALL")})])
        assert encode(doc) == "<EOH><CALL:6>N0CALL<EOR>"

    def test_empty_document(self):
        assert encode(Document()) == "<EOH>"

    def test_header_and_records(self):
        doc = Document(
            header=Header({"ADIF_VER": "3.1.4"}),
            records=[Record({"CALL": "W1AW"}), Record({"CALL": "K1ABC"})],
        )
        assert encode(doc) == "<ADIF_VER:5>3.1.4<EOH><CALL:4>W1AW<EOR><CALL:5>K1ABC<EOR>"

    def test_lines_layout(self):
        doc = Document(
            header=Header({"ADIF_VER": "3.1.4"}),
            records=[Record({"CALL": "W1AW", "BAND": Enumeration("20M")})],
        )
        assert encode(doc, layout=EncodeLayout.LINES) == (
            "<ADIF_VER:5>3.1.4\n<EOH>\n"
            "\n"
            "<CALL:4>W1AW\n<BAND:3>20M\n<EOR>\n"
        )

    def test_preamble(self):
        doc = Document(records=[Record({"CALL": "W1AW"})])
        text = encode(doc, preamble="Exported log", layout=EncodeLayout.LINES)
        assert text.startswith("Exported log\n")
        assert parse(text) == doc

    def test_preamble_rejects_tags(self):
        with pytest.raises(ValueError):
            encode(Document(), preamble="see <here>")

    def test_field_order(self):
        doc = Document(records=[Record({"BAND": Enumeration("20M"), "NAME": "Bob", "CALL": "W1AW"})])
        assert encode(doc, field_order=["call", "missing", "CALL"]) == (
            "<EOH><CALL:4>W1AW<BAND:3>20M<NAME:3>Bob<EOR>"
        )

    def test_insertion_order_is_default(self):
        doc = Document(records=[Record({"NAME": "Bob", "CALL": "W1AW"})])
        assert encode(doc) == "<EOH><NAME:3>Bob<CALL:4>W1AW<EOR>"

    def test_does_not_modify_document(self):
        doc = build_example_log()
        before = repr(doc)
        encode(doc, field_order=["CALL"], layout=EncodeLayout.LINES)
        assert repr(doc) == before


class TestRoundTrip:
    """parse(encode(d)) == d for documents without empty records."""

    def test_example_log(self):
        doc = build_example_log(contact_count=5)
        assert parse(encode(doc)) == doc

    @pytest.mark.parametrize("layout", list(EncodeLayout))
    def test_layouts(self, layout):
        doc = build_example_log()
        assert parse(encode(doc, layout=layout)) == doc

    def test_values_with_tag_characters(self):
        doc = Document(records=[Record({"COMMENT": Text("<EOR> <CALL:4>FAKE"), "CALL": "W1AW"})])
        assert parse(encode(doc)) == doc

    def test_mismatched_types_survive(self):
        doc = Document(records=[Record({
            "QSO_DATE": Text("unknown"),
            "MODE": Text("plain text"),
            "CALL": Enumeration("W1AW"),
            "APP_TIME": Time(datetime.time(1, 2, 3)),
        })])
        assert parse(encode(doc)) == doc

    def test_empty_values(self):
        doc = parse("<EOH><CALL:4>W1AW<TX_PWR:0><QSO_DATE:0><SWL:0><MODE:0><EOR>")
        assert parse(encode(doc)) == doc
        assert "<TX_PWR:0:S>" in encode(doc)

    def test_datetime_as_date(self):
        doc = Document(records=[Record({"QSO_DATE": Date(datetime.datetime(2023, 1, 15, 12, 30))})])
        assert parse(encode(doc)) == doc

    def test_multiline_and_unicode_text(self):
        doc = Document(records=[Record({"NOTES": Text("line one\nline two"), "NAME": Text("Jörg")})])
        assert parse(encode(doc)) == doc

    def test_idempotent(self):
        first = encode(build_example_log(contact_count=4))
        second = encode(parse(first))
        assert first == second

    def test_lengths_match(self):
        data = encode(build_example_log(contact_count=4)).encode("utf-8")
        assert declared_lengths_match(data)

    def test_save_and_parse_file(self, tmp_path):
        doc = Document(records=[Record({"NOTES": Text("a\nb"), "NAME": Text("Jörg")})])
        path = tmp_path / "out.adi"
        save_adi_file(doc, str(path), layout=EncodeLayout.LINES)
        assert b"\r\n" not in path.read_bytes()
        assert parse_file(str(path)) == doc

    def test_save_latin1(self, tmp_path):
        doc = Document(records=[Record({"NAME": Text("Jörg")})])
        path = tmp_path / "out.adi"
        save_adi_file(doc, str(path), encoding="latin-1")
        assert path.read_bytes() == b"<EOH><NAME:4>J\xf6rg<EOR>"
        assert parse_file(str(path), encoding="latin-1") == doc
