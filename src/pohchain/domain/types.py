"""Shared type aliases and constants used across the domain."""
from __future__ import annotations

from typing import Any, TypeAlias

# Size in bytes of every chain state and entry boundary hash.
DIGEST_SIZE = 32

HexDigest: TypeAlias = str     # 64 lowercase hex characters
RawDigest: TypeAlias = bytes   # exactly DIGEST_SIZE bytes
TickCount: TypeAlias = int
JsonValue: TypeAlias = Any     # scalars, lists and str-keyed mappings
