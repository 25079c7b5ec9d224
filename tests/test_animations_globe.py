import pytest

from pingpong.animations_globe import ROCKET, SATELLITE, generate_globe_animation
from pingpong.animations_motion import effective_size


@pytest.mark.parametrize(
    "width,height",
    [(44, 26), (3, 3), (80, 40), (44, 7), (30, 12), (5, 7)],
)
def test_dimensions_match_effective_area(width, height):
    eff_w, eff_h = effective_size(width, height)
    lines = generate_globe_animation(1.7, width, height).split("\n")
    assert len(lines) == eff_h
    assert all(len(line) == eff_w for line in lines)


def test_deterministic_for_same_inputs():
    first = generate_globe_animation(3.25, 60, 30)
    second = generate_globe_animation(3.25, 60, 30)
    assert first == second


def test_night_status_line_at_start():
    lines = generate_globe_animation(0.0, 44, 26).split("\n")
    assert "Global Network ◐ 🌙 Night" in lines[-1]


def test_day_status_line_later():
    lines = generate_globe_animation(120.0, 44, 26).split("\n")
    assert "☀️ Day" in lines[-1]


def test_status_omitted_when_too_narrow():
    output = generate_globe_animation(0.0, 30, 26)
    assert "Global Network" not in output


def test_rocket_orbits_in_large_area():
    assert ROCKET in generate_globe_animation(0.0, 44, 26)


def test_no_rocket_in_narrow_area():
    assert ROCKET not in generate_globe_animation(0.0, 20, 26)


def test_zero_radius_globe_is_rendered():
    output = generate_globe_animation(0.5, 44, 7)
    assert output.count("\n") == 0
    assert len(output) == 40


def test_corners_are_space_or_stars():
    allowed = set(" ✦✧✩✪✫✬✭✮*·") | {SATELLITE}
    lines = generate_globe_animation(2.0, 80, 40).split("\n")
    corners = {lines[0][0], lines[0][-1], lines[1][0], lines[1][-1]}
    assert corners <= allowed