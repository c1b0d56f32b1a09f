from __future__ import annotations

import pytest

from errors import InvalidInput
from labels import wrap_label


def test_label_that_fits_is_unchanged():
    assert wrap_label("On Time", 16) == ["On Time"]


def test_long_label_wraps():
    lines = wrap_label("Delayed/Incorrect Use", 16)
    assert len(lines) > 1
    for line in lines:
        assert len(line) <= 16 or " " not in line
    assert lines == ["Delayed/Incorrect", "Use"]


def test_greedy_fill():
    assert wrap_label("Benchmark Store 82", 16) == ["Benchmark Store", "82"]
    assert wrap_label("a b c d e f", 3) == ["a b", "c d", "e f"]


def test_long_word_is_not_split():
    assert wrap_label("Supercalifragilistic", 5) == ["Supercalifragilistic"]
    assert wrap_label("to Supercalifragilistic go", 5) == ["to", "Supercalifragilistic", "go"]


def test_width_exactly_label_length():
    assert wrap_label("Key Stores", 10) == ["Key Stores"]


@pytest.mark.parametrize("width", [0, -3, 1.5, None])
def test_invalid_width(width):
    with pytest.raises(InvalidInput):
        wrap_label("Key Stores", width)
