"""Mini README: Tests for deterministic category colours.

Structure:
    * test_empty_name_is_black - the empty string still yields a full code.
    * test_known_codes - hand-computed hashes for short names.
    * test_colours_are_stable_and_well_formed - repeated calls agree.
"""

from __future__ import annotations

import re

from budgetbite.analytics import color_for
from budgetbite.analytics.colors import name_hash

HEX_COLOUR = re.compile(r"^#[0-9A-F]{6}$")


def test_empty_name_is_black() -> None:
    assert color_for("") == "#000000"


def test_known_codes() -> None:
    """``a`` folds to 97 and ``ab`` to 98 + 97 * 31."""

    assert color_for("a") == "#000061"
    assert color_for("ab") == "#000C21"
    # Astral characters are folded as two UTF-16 code units.
    assert color_for("\U0001F600") == "#1B0D63"


def test_hash_wraps_to_signed_32_bits() -> None:
    """Long names overflow the accumulator but stay inside the int32 range."""

    value = name_hash("GROCERIES AND HOUSEHOLD SUPPLIES FOR THE WHOLE MONTH")
    assert -(2**31) <= value < 2**31
    assert color_for("GROCERIES AND HOUSEHOLD SUPPLIES FOR THE WHOLE MONTH") == (
        "#" + format(value & 0xFFFFFF, "06X")
    )


def test_colours_are_stable_and_well_formed() -> None:
    names = ["COFFEE", "RENT", "FOOD", "coffee", "৳ BAZAR", "X" * 500]
    first = [color_for(name) for name in names]
    second = [color_for(name) for name in reversed(names)][::-1]
    assert first == second
    assert all(HEX_COLOUR.match(colour) for colour in first)
    assert color_for("COFFEE") != color_for("coffee")
