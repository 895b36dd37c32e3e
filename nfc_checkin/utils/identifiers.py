# =======================================================================================
# nfc_checkin/utils/identifiers.py - Identifier Normalization
# =======================================================================================
"""
Canonicalizes raw tag identifiers into uppercase hex keys.

Readers hand over UIDs in several shapes: "04:a2:3b:91", "04-A2-3B-91",
b"\x04\xa2\x3b\x91" or [4, 162, 59, 145]. All of them must resolve to the same
registry key. Byte order is significant; callers supply bytes in reader order.
"""
import re
import secrets
import time
from dataclasses import dataclass
from typing import Any

SYNTHETIC_PREFIX = "TEMP"

_HEX_WITH_SEPARATORS = re.compile(r"^[0-9A-Fa-f:\-]+$")
_SEPARATORS = re.compile(r"[:\-]")
_NON_HEX = re.compile(r"[^0-9A-Fa-f]")


@dataclass(frozen=True)
class Identifier:
    """A canonical key; synthetic=True marks a fallback that did not come from a real reading."""
    value: str
    synthetic: bool = False

    def __str__(self) -> str:
        return self.value


def _bytes_to_hex(values) -> str:
    return "".join(f"{b:02X}" for b in values)


def _is_byte_sequence(raw: Any) -> bool:
    if not isinstance(raw, (list, tuple)):
        return False
    return all(
        isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255 for v in raw
    )


def _synthesize() -> Identifier:
    timestamp = format(int(time.time() * 1000), "x")
    suffix = secrets.token_hex(3)
    return Identifier(f"{SYNTHETIC_PREFIX}{timestamp}{suffix}".upper(), synthetic=True)


def normalize(raw: Any) -> Identifier:
    """
    Map a raw identifier to its canonical form. Never raises.

    - hex string with optional ':'/'-' separators -> separators stripped, uppercased
    - bytes-like or sequence of ints 0-255 -> two uppercase hex digits per byte
    - anything else -> non-hex characters stripped, uppercased; synthetic
      TEMP key if nothing is left
    """
    if isinstance(raw, str):
        candidate = raw.strip()
        if _HEX_WITH_SEPARATORS.match(candidate):
            value = _SEPARATORS.sub("", candidate).upper()
            return Identifier(value) if value else _synthesize()
    elif isinstance(raw, (bytes, bytearray, memoryview)):
        value = _bytes_to_hex(bytes(raw))
        return Identifier(value) if value else _synthesize()
    elif _is_byte_sequence(raw):
        value = _bytes_to_hex(raw)
        return Identifier(value) if value else _synthesize()

    try:
        value = _NON_HEX.sub("", str(raw)).upper()
    except Exception:
        # objects whose __str__ raises still get a (flagged) key
        value = ""
    return Identifier(value) if value else _synthesize()


def is_synthetic(value: str) -> bool:
    """True for keys produced by the fallback path. T, M and P are never hex digits."""
    return str(value).upper().startswith(SYNTHETIC_PREFIX)
