"""Mini README: Deterministic category colours.

``color_for`` folds a name into a signed 32-bit accumulator with the
``hash * 31 + code`` polynomial (written as ``code + (hash << 5) - hash``)
and keeps the low 24 bits as an RGB hex colour. Characters are folded as
UTF-16 code units so names outside the Basic Multilingual Plane colour the
same way in every client. Collisions are harmless; colours are cosmetic.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator

_INT32_MASK = 0xFFFFFFFF
_RGB_MASK = 0x00FFFFFF


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_code_units(text: str) -> Iterator[int]:
    encoded = text.encode("utf-16-le", "surrogatepass")
    for offset in range(0, len(encoded), 2):
        yield encoded[offset] | (encoded[offset + 1] << 8)


def name_hash(name: str) -> int:
    """Return the signed 32-bit polynomial hash of ``name``."""

    accumulator = 0
    for code in _utf16_code_units(name):
        accumulator = _to_int32(code + ((accumulator << 5) - accumulator))
    return accumulator


@lru_cache(maxsize=1024)
def color_for(name: str) -> str:
    """Map ``name`` to a stable ``#RRGGBB`` colour; ``""`` maps to ``#000000``."""

    return "#" + format(name_hash(name) & _RGB_MASK, "06X")
