import pytest

from pingpong.animations_motion import effective_size
from pingpong.animations_overlay import (
    BLOCK,
    FAILURE_MESSAGES,
    generate_connection_failure_overlay,
)


class _FixedBits:
    def __init__(self, value):
        self.value = value

    def getrandbits(self, k):
        return self.value


WIDTH, HEIGHT = 24, 18


def _overlay(base="", bits=0):
    return generate_connection_failure_overlay(base, WIDTH, HEIGHT, _FixedBits(bits)).split("\n")


def test_blank_base_is_padded_to_effective_size():
    eff_w, eff_h = effective_size(WIDTH, HEIGHT)
    rows = _overlay()
    assert len(rows) == eff_h
    assert all(len(row) == eff_w for row in rows)


@pytest.mark.parametrize("bits", range(4))
def test_failure_message_is_chosen_by_rng(bits):
    rows = _overlay(bits=bits)
    assert rows[-2].strip() == FAILURE_MESSAGES[bits]


def test_message_choice_wraps_modulo_message_count():
    rows = _overlay(bits=len(FAILURE_MESSAGES) + 1)
    assert rows[-2].strip() == FAILURE_MESSAGES[1]


def test_cross_is_symmetric_about_centre_column():
    eff_w, _ = effective_size(WIDTH, HEIGHT)
    center_x = eff_w // 2
    rows = _overlay()
    block_rows = [row for row in rows if BLOCK in row]
    assert block_rows
    for row in block_rows:
        positions = {x for x, char in enumerate(row) if char == BLOCK}
        assert len(positions) <= 2
        assert {2 * center_x - x for x in positions} == positions


def test_warning_marks_are_present():
    text = "\n".join(_overlay())
    for mark in ("⚠", "!", "×", "✗"):
        assert mark in text


def test_rows_outside_the_cross_keep_base_content():
    eff_w, eff_h = effective_size(WIDTH, HEIGHT)
    base = "\n".join("." * eff_w for _ in range(eff_h))
    rows = _overlay(base)
    assert rows[0] == "." * eff_w
    assert rows[-1] == "." * eff_w


def test_trailing_newline_adds_no_row():
    rows = _overlay("abc\n")
    eff_w, eff_h = effective_size(WIDTH, HEIGHT)
    assert rows[0] == "abc"
    assert len(rows) == eff_h


def test_base_taller_than_area_keeps_all_rows():
    eff_w, eff_h = effective_size(WIDTH, HEIGHT)
    base = "\n".join(" " * eff_w for _ in range(eff_h + 5))
    rows = generate_connection_failure_overlay(base, WIDTH, HEIGHT, _FixedBits(0)).split("\n")
    assert len(rows) == eff_h + 5


def test_tiny_area_gets_single_block():
    assert generate_connection_failure_overlay("", 5, 7, _FixedBits(0)) == BLOCK