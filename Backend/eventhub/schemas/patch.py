"""Patch representation shared by the request drafts.

A draft field holding ``UNSET`` was never supplied by the client; any other
value (``None`` included) was supplied and is subject to validation.
"""
import dataclasses
from typing import Any


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def is_supplied(value) -> bool:
    return value is not UNSET


def supplied_fields(draft) -> dict:
    """Return the fields of a draft that the client actually sent."""
    return {
        field.name: getattr(draft, field.name)
        for field in dataclasses.fields(draft)
        if is_supplied(getattr(draft, field.name))
    }


def draft_from_payload(draft_cls, payload: dict, **server_fields):
    """Build a draft from a JSON object, leaving absent keys as UNSET.

    ``server_fields`` are filled by the server and always override the payload.
    """
    values = {}
    for field in dataclasses.fields(draft_cls):
        if field.name in server_fields:
            values[field.name] = server_fields[field.name]
        elif field.name in payload:
            values[field.name] = payload[field.name]
    return draft_cls(**values)
