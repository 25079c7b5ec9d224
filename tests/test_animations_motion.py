import pytest

from pingpong.animations_motion import (
    MATRIX_CHARS,
    effective_size,
    generate_bouncing_rtt_animation,
    generate_matrix_animation,
)


def _lines(text):
    return text.split("\n")


def test_effective_size_small_panel_uses_fallback():
    assert effective_size(3, 3) == (20, 12)
    assert effective_size(10, 10) == (6, 4)


@pytest.mark.parametrize("width, height", [(40, 20), (3, 3), (80, 30)])
def test_bouncing_dimensions(width, height):
    eff_w, eff_h = effective_size(width, height)
    lines = _lines(generate_bouncing_rtt_animation((5.0, 3.0), width, height, 12.5))
    assert len(lines) == eff_h
    assert all(len(line) == eff_w for line in lines)


def test_bouncing_corners_and_text_position():
    lines = _lines(generate_bouncing_rtt_animation((5.0, 3.0), 40, 20, 12.5))
    assert lines[0][0] == "┌" and lines[0][-1] == "┐"
    assert lines[-1][0] == "└" and lines[-1][-1] == "┘"
    assert lines[3][5:11] == "12.5ms"
    assert lines[3][4] == "·"
    assert lines[3][3] == "."


def test_bouncing_position_is_clamped():
    lines = _lines(generate_bouncing_rtt_animation((1000.0, 1000.0), 40, 20, 12.5))
    last = lines[-1]
    assert last[-6:-1] == "12.5m"
    assert last.endswith("┘")


def test_matrix_dimensions_and_alphabet():
    eff_w, eff_h = effective_size(60, 30)
    lines = _lines(generate_matrix_animation(3.7, 60, 30, 100.0))
    assert len(lines) == eff_h
    assert all(len(line) == eff_w for line in lines)
    assert set("".join(lines)) <= set(MATRIX_CHARS) | {" "}


def test_matrix_is_deterministic():
    first = generate_matrix_animation(5.0, 60, 30, 80.0)
    assert first == generate_matrix_animation(5.0, 60, 30, 80.0)


def test_matrix_inactive_column_is_blank():
    lines = _lines(generate_matrix_animation(2.0, 60, 30, 100.0))
    assert all(line[1] == " " for line in lines)


def test_matrix_neo_message_for_fast_connections():
    eff_w, eff_h = effective_size(60, 30)
    fast = _lines(generate_matrix_animation(0.0, 60, 30, 10.0))
    assert "Wake up, Neo..." in fast[eff_h // 2]
    slow = generate_matrix_animation(0.0, 60, 30, 100.0)
    assert "Wake up, Neo..." not in slow


def test_matrix_glitches_only_on_slow_connections():
    glitchy = generate_matrix_animation(1.0, 100, 60, 300.0)
    glitch_chars = set("▒░?‾")
    calm = generate_matrix_animation(1.0, 100, 60, 100.0)
    assert not glitch_chars & set(calm)
    assert len(_lines(glitchy)) == effective_size(100, 60)[1]