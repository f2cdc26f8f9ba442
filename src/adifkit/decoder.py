"""
Field Decoder (Layer 2: raw value bytes -> typed FieldValue).

The datatype of a field is resolved in this order:
    1. explicit type indicator on the tag   <FREQ:6:N>14.074
    2. static FIELD_TYPES lookup by name    <QSO_DATE:8>20230115
    3. TEXT

Fields without a hint and without a table entry never fail: they
are stored verbatim. This keeps the core usable with application
specific (APP_*) and future field names.
"""

import datetime
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from adifkit.errors import InvalidFieldValueError
from adifkit.values import (
    DataType,
    TYPE_INDICATORS,
    FieldValue,
    Text,
    Number,
    Date,
    Time,
    Boolean,
    Enumeration,
)


def _table(data_type: DataType, *names: str) -> Dict[str, DataType]:
    return {name: data_type for name in names}


FIELD_TYPES: Dict[str, DataType] = {
    **_table(
        DataType.DATE,
        "QSO_DATE", "QSO_DATE_OFF",
        "QSLRDATE", "QSLSDATE",
        "LOTW_QSLRDATE", "LOTW_QSLSDATE",
        "EQSL_QSLRDATE", "EQSL_QSLSDATE",
        "CLUBLOG_QSO_UPLOAD_DATE", "HRDLOG_QSO_UPLOAD_DATE",
        "QRZCOM_QSO_UPLOAD_DATE", "HAMLOGEU_QSO_UPLOAD_DATE",
        "HAMQTH_QSO_UPLOAD_DATE", "DCL_QSLRDATE", "DCL_QSLSDATE",
    ),
    **_table(DataType.TIME, "TIME_ON", "TIME_OFF"),
    **_table(
        DataType.NUMBER,
        "FREQ", "FREQ_RX", "TX_PWR", "RX_PWR",
        "DXCC", "MY_DXCC", "CQZ", "MY_CQ_ZONE", "ITUZ", "MY_ITU_ZONE",
        "AGE", "A_INDEX", "K_INDEX", "SFI", "DISTANCE",
        "ANT_AZ", "ANT_EL", "ALTITUDE", "MY_ALTITUDE",
        "MAX_BURSTS", "NR_BURSTS", "NR_PINGS",
        "FISTS", "FISTS_CC", "TEN_TEN", "UKSMG",
    ),
    **_table(DataType.BOOLEAN, "FORCE_INIT", "QSO_RANDOM", "SWL", "SILENT_KEY"),
    **_table(
        DataType.ENUMERATION,
        "BAND", "BAND_RX", "MODE", "SUBMODE", "CONT", "PROP_MODE", "ANT_PATH",
        "ARRL_SECT", "MY_ARRL_SECT", "REGION", "QSO_COMPLETE",
        "QSL_RCVD", "QSL_SENT", "QSL_RCVD_VIA", "QSL_SENT_VIA",
        "LOTW_QSL_RCVD", "LOTW_QSL_SENT",
        "EQSL_QSL_RCVD", "EQSL_QSL_SENT",
        "DCL_QSL_RCVD", "DCL_QSL_SENT",
        "CLUBLOG_QSO_UPLOAD_STATUS", "HRDLOG_QSO_UPLOAD_STATUS",
        "QRZCOM_QSO_UPLOAD_STATUS", "HAMLOGEU_QSO_UPLOAD_STATUS",
        "HAMQTH_QSO_UPLOAD_STATUS",
    ),
}

_DIGITS = re.compile(r"[0-9]+")
_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def resolve_type(name: str, type_hint: str = "") -> DataType:
    """
    Decide the datatype for a field.

    Args:
        name: Canonical field name
        type_hint: Type indicator from the tag, "" if none

    Returns:
        DataType

    Raises:
        InvalidFieldValueError: If ``type_hint`` is not a known indicator
    """
    if type_hint:
        data_type = TYPE_INDICATORS.get(type_hint.upper())
        if data_type is None:
            raise InvalidFieldValueError(
                name, type_hint, b"", f"unknown data type indicator {type_hint!r}"
            )
        return data_type
    return FIELD_TYPES.get(name.upper(), DataType.TEXT)


def _fail(name: str, data_type: DataType, raw: bytes, reason: str):
    raise InvalidFieldValueError(name, data_type.name.lower(), raw, reason)


def _decode_date(name: str, text: str, raw: bytes) -> Date:
    if len(text) != 8 or not _DIGITS.fullmatch(text):
        _fail(name, DataType.DATE, raw, "expected 8 digits YYYYMMDD")
    try:
        return Date(datetime.date(int(text[:4]), int(text[4:6]), int(text[6:])))
    except ValueError as e:
        _fail(name, DataType.DATE, raw, str(e))


def _decode_time(name: str, text: str, raw: bytes) -> Time:
    if len(text) not in (4, 6) or not _DIGITS.fullmatch(text):
        _fail(name, DataType.TIME, raw, "expected 4 or 6 digits HHMM[SS]")
    second = int(text[4:]) if len(text) == 6 else 0
    try:
        value = datetime.time(int(text[:2]), int(text[2:4]), second)
    except ValueError as e:
        _fail(name, DataType.TIME, raw, str(e))
    return Time(value, has_seconds=len(text) == 6)


def _decode_boolean(name: str, text: str, raw: bytes) -> Boolean:
    flag = text.upper()
    if flag not in ("Y", "N"):
        _fail(name, DataType.BOOLEAN, raw, "expected Y or N")
    return Boolean(flag == "Y")


def _decode_number(name: str, text: str, raw: bytes) -> Number:
    if not _NUMBER.fullmatch(text):
        _fail(name, DataType.NUMBER, raw, "not a decimal number")
    try:
        return Number(Decimal(text))
    except InvalidOperation:
        _fail(name, DataType.NUMBER, raw, "not a decimal number")


def decode_value(
    name: str,
    type_hint: str,
    raw: bytes,
    encoding: str = "utf-8",
    data_type: Optional[DataType] = None,
) -> FieldValue:
    """
    Convert the raw bytes of one field into a typed value.

    Args:
        name: Canonical field name
        type_hint: Type indicator from the tag, "" if none
        raw: Exact value bytes
        encoding: Character encoding of the document
        data_type: Pre-resolved datatype (skips resolve_type)

    Returns:
        FieldValue

    Raises:
        InvalidFieldValueError: If the bytes do not fit the datatype
    """
    if data_type is None:
        try:
            data_type = resolve_type(name, type_hint)
        except InvalidFieldValueError as e:
            raise InvalidFieldValueError(name, e.expected_type, raw, e.reason) from None

    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        _fail(name, data_type, raw, f"not valid {encoding}: {e.reason}")

    # empty values are legal for every datatype
    if not text and data_type not in (DataType.TEXT, DataType.ENUMERATION):
        return Text("")

    if data_type == DataType.TEXT:
        return Text(text)
    if data_type == DataType.ENUMERATION:
        return Enumeration(text)
    if data_type == DataType.DATE:
        return _decode_date(name, text, raw)
    if data_type == DataType.TIME:
        return _decode_time(name, text, raw)
    if data_type == DataType.BOOLEAN:
        return _decode_boolean(name, text, raw)
    if data_type == DataType.NUMBER:
        return _decode_number(name, text, raw)

    raise TypeError(f"Unsupported data type: {data_type}")


__all__ = [
    "FIELD_TYPES",
    "resolve_type",
    "decode_value",
]
