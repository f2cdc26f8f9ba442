"""
Serialization helpers for ADIF documents (Document, Header, Record, values).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Each value is stored as {"type": <datatype name>, "value": <wire text>},
using the same text form the encoder writes into .adi files.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from adifkit.decoder import decode_value
from adifkit.encoder import serialize_value
from adifkit.errors import InvalidFieldValueError
from adifkit.model import Document, Header, Record
from adifkit.values import DataType, FieldValue


def value_to_dict(v: FieldValue) -> Dict[str, Any]:
    return {"type": v.data_type.name.lower(), "value": serialize_value(v)}


def value_from_dict(d: Dict[str, Any], name: str = "") -> FieldValue:
    try:
        data_type = DataType[d["type"].upper()]
    except (KeyError, AttributeError):
        raise TypeError(f"Unsupported value dict type: {d.get('type')}")
    try:
        return decode_value(name, "", str(d["value"]).encode("utf-8"), data_type=data_type)
    except InvalidFieldValueError as e:
        raise ValueError(str(e)) from None


def fields_to_dict(fields: Dict[str, FieldValue]) -> Dict[str, Any]:
    return {name: value_to_dict(v) for name, v in fields.items()}


def fields_from_dict(d: Dict[str, Any]) -> Dict[str, FieldValue]:
    return {name: value_from_dict(v, name) for name, v in (d or {}).items()}


def document_to_dict(doc: Document) -> Dict[str, Any]:
    return {
        "header": fields_to_dict(doc.header.fields),
        "records": [fields_to_dict(r.fields) for r in doc.records],
    }


def document_from_dict(d: Dict[str, Any]) -> Document:
    return Document(
        header=Header(fields_from_dict(d.get("header", {}))),
        records=[Record(fields_from_dict(r)) for r in d.get("records", [])],
    )


def document_to_json(doc: Document) -> str:
    return json.dumps(document_to_dict(doc))


def document_from_json(s: str) -> Document:
    d = json.loads(s)
    return document_from_dict(d)


def document_to_yaml(doc: Document) -> str:
    return yaml.safe_dump(document_to_dict(doc), sort_keys=False)


def document_from_yaml(s: str) -> Document:
    d = yaml.safe_load(s)
    return document_from_dict(d or {})
