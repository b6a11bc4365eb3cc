"""Canonical serialization for events and entry fields.

Hash-based determinism only holds if structurally equal values always
produce the same bytes. Python dicts iterate in insertion order, so
``{"a": 1, "b": 2}`` and ``{"b": 2, "a": 1}`` compare equal but would
serialize differently under a naive ``json.dumps``. We normalize the
value tree first (mappings to plain dicts with str keys, tuples to
lists, Event records to their mapping form) and then emit compact JSON
with sorted keys.

The normalizer is strict. Non-string keys are rejected rather than
coerced, because ``{1: "x"}`` and ``{"1": "x"}`` would otherwise
collide. NaN and Infinity are rejected because JSON has no spelling for
them. Cycles are detected by object identity on the current path.

Note that ``1`` and ``1.0`` serialize differently (``1`` vs ``1.0``),
and ``True`` is never confused with ``1``. ``-0.0`` is written as ``0.0``
since the two compare equal. Strings containing lone surrogates have no
UTF-8 form and are rejected.
"""
from __future__ import annotations

import json
import math
import struct
from collections.abc import Mapping
from typing import Any

from pohchain.domain.entry import Event
from pohchain.errors import SerializationError

# 4-byte big-endian unsigned length, as used for every hashed field.
LENGTH_PREFIX = struct.Struct("!I")

_SCALARS = (int, bool, type(None))


def length_prefixed(data: bytes) -> bytes:
    """Length-prefix a byte string with a 4-byte big-endian length.

    Concatenating length-prefixed fields is injective: a reader can
    always split the stream back into the original fields.
    """
    return LENGTH_PREFIX.pack(len(data)) + data


def _check_text(text: str, path: str) -> str:
    # Lone surrogates are valid str but have no UTF-8 encoding.
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise SerializationError("unencodable string", path) from None
    return text


def _normalize(value: Any, path: str, active: set[int]) -> Any:
    if isinstance(value, str):
        return _check_text(value, path)
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"non-finite float {value!r}", path)
        # -0.0 == 0.0, so both take the same spelling.
        return value + 0.0

    if isinstance(value, Event):
        value = value.to_dict()

    if isinstance(value, Mapping):
        marker = id(value)
        if marker in active:
            raise SerializationError("cyclic structure", path)
        active.add(marker)
        try:
            out: dict[str, Any] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise SerializationError(
                        f"mapping key must be str, got {type(key).__name__}", path
                    )
                _check_text(key, path)
                out[key] = _normalize(item, f"{path}.{key}", active)
            return out
        finally:
            active.discard(marker)

    if isinstance(value, (list, tuple)):
        marker = id(value)
        if marker in active:
            raise SerializationError("cyclic structure", path)
        active.add(marker)
        try:
            return [
                _normalize(item, f"{path}[{i}]", active)
                for i, item in enumerate(value)
            ]
        finally:
            active.discard(marker)

    raise SerializationError(f"unsupported type {type(value).__name__}", path)


def normalize(value: Any) -> Any:
    """Return a plain JSON-compatible copy of ``value``.

    Raises SerializationError if any part of the tree cannot be represented.
    """
    return _normalize(value, "$", set())


def canonicalize(value: Any) -> bytes:
    """Produce deterministic UTF-8 JSON bytes for ``value``.

    - Sorts mapping keys at every depth
    - Uses compact separators
    - Keeps non-ASCII text as UTF-8 rather than escapes
    """
    serialized = json.dumps(
        normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return serialized.encode("utf-8")
