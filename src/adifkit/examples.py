"""
Example log builder.

Builds a small but realistic contact log: a header with format and
program metadata, and a run of contacts on alternating bands and modes
covering every datatype.
"""
import datetime
from decimal import Decimal

from adifkit.model import Document, Header, Record
from adifkit.values import Text, Number, Date, Time, Boolean, Enumeration


def build_example_log(contact_count: int = 3, start: datetime.datetime = None) -> Document:
    if start is None:
        start = datetime.datetime(2023, 1, 15, 12, 30)

    header = Header({
        "ADIF_VER": Text("3.1.4"),
        "PROGRAMID": Text("adifkit"),
        "PROGRAMVERSION": Text("0.1.0"),
        "CREATED_TIMESTAMP": Text(start.strftime("%Y%m%d %H%M%S")),
    })

    bands = [("20M", Decimal("14.074"), "FT8"), ("40M", Decimal("7.150"), "SSB")]
    calls = ["W1AW", "DL1ABC", "JA1XYZ", "VK2DEF", "G4HIJ"]

    records = []
    for i in range(contact_count):
        band, freq, mode = bands[i % len(bands)]
        when = start + datetime.timedelta(minutes=7 * i, seconds=15 * i)

        records.append(Record({
            "CALL": Text(calls[i % len(calls)]),
            "QSO_DATE": Date(when.date()),
            "TIME_ON": Time(when.time(), has_seconds=when.second != 0),
            "BAND": Enumeration(band),
            "FREQ": Number(freq),
            "MODE": Enumeration(mode),
            "RST_SENT": Text("-10" if mode == "FT8" else "59"),
            "TX_PWR": Number(100),
            "QSO_RANDOM": Boolean(True),
            # Free text may legally contain tag characters
            "COMMENT": Text(f"QSO #{i + 1} <tnx>"),
        }))

    return Document(header=header, records=records)
