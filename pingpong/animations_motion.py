"""Text animations driven by motion: the bouncing RTT readout and digital rain."""

from __future__ import annotations

import math

MATRIX_CHARS = (
    "アイウエオカキクケコ"
    "サシスセソタチツテト"
    "ナニヌネノハヒフヘホ"
    "マミムメモヤユヨラリ"
    "ルレロワヲン0123"
    "456789:·\"="
    "*+<>¦|Z_"
)

_NEO_MESSAGES = (
    "Wake up, Neo...",
    "The Matrix has you...",
    "Follow the white rabbit",
    "There is no spoon",
)

_GLITCH_CHARS = "▒░·?‾"


def effective_size(width: int, height: int) -> tuple[int, int]:
    """Return the drawable area inside a bordered panel of the given size."""
    return (width - 4 if width > 4 else 20, height - 6 if height > 6 else 12)


def _to_index(value: float) -> int:
    """Convert a float to a non-negative index, saturating at zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**64 - 1
    return int(value)


def _fmt_ms(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:.1f}"


def _blank(width: int, height: int) -> list[list[str]]:
    return [[" "] * width for _ in range(height)]


def _join(grid: list[list[str]]) -> str:
    return "\n".join("".join(row) for row in grid)


def generate_bouncing_rtt_animation(
    bounce_pos: tuple[float, float], width: int, height: int, avg_rtt: float
) -> str:
    """Draw the RTT value at the bounce position inside a cornered field."""
    eff_w, eff_h = effective_size(width, height)
    grid = _blank(eff_w, eff_h)

    text = f"{_fmt_ms(avg_rtt)}ms"
    x_pos = min(_to_index(bounce_pos[0]), max(eff_w - len(text), 0))
    y_pos = min(_to_index(bounce_pos[1]), max(eff_h - 1, 0))

    if y_pos < len(grid):
        row = grid[y_pos]
        for offset, char in enumerate(text):
            if x_pos + offset < len(row):
                row[x_pos + offset] = char

    if grid:
        for row, (left, right) in ((grid[0], "┌┐"), (grid[-1], "└┘")):
            if row:
                row[0] = left
            if len(row) > 1:
                row[-1] = right

    if eff_h > 2 and x_pos > 2 and y_pos > 0:
        row = grid[y_pos]
        for offset, char in ((1, "·"), (2, "."), (3, " ")):
            trail_x = x_pos - offset
            if trail_x < len(row) and row[trail_x] == " ":
                row[trail_x] = char

    return _join(grid)


def generate_matrix_animation(time: float, width: int, height: int, avg_rtt: float) -> str:
    """Draw falling columns of glyphs whose speed follows the RTT."""
    eff_w, eff_h = effective_size(width, height)
    grid = _blank(eff_w, eff_h)
    chars = MATRIX_CHARS

    if avg_rtt < 50.0:
        speed = 2.0
    elif avg_rtt < 150.0:
        speed = 1.5
    else:
        speed = 1.0
    time_factor = _to_index(time * speed * 0.3)

    for x in range(eff_w):
        seed = x * 17
        phase = math.fmod(x * 0.618, 1.0)
        has_stream = seed % 13 < 4

        if has_stream:
            stream_speed = 1.0 + ((seed // 7) % 3) * 0.3
            length = 8 + seed % 8
            offset = math.fmod(
                time * speed * stream_speed + phase * eff_h, eff_h + length * 2.0
            )
            for i in range(length):
                y = int(offset - i) if math.isfinite(offset) else -1
                if 0 <= y < eff_h:
                    grid[y][x] = chars[(seed + i * 11 + time_factor // 3) % len(chars)]
        elif seed % 23 < 3:
            static_y = (seed // 5) % eff_h
            grid[static_y][x] = chars[(seed * 7 + time_factor // 10) % len(chars)]

    if avg_rtt > 150.0:
        intensity = min((avg_rtt - 150.0) / 100.0, 0.3)
        glitches = _to_index(eff_h * eff_w * intensity * 0.02)
        if glitches:
            gx = (_to_index(time * 3.0) * 7 + eff_w // 3) % eff_w
            gy = (_to_index(time * 2.0) * 11 + eff_h // 4) % eff_h
            grid[gy][gx] = _GLITCH_CHARS[(_to_index(time) + gx + gy) % len(_GLITCH_CHARS)]

    if avg_rtt < 15.0 and _to_index(time * 0.3) % 25 < 4:
        message = _NEO_MESSAGES[_to_index(time * 0.1) % len(_NEO_MESSAGES)]
        center_y = eff_h // 2
        if center_y < eff_h and eff_w > len(message):
            start = (eff_w - len(message)) // 2
            row = grid[center_y]
            for clear_x in range(max(start - 1, 0), min(start + len(message), eff_w - 1) + 1):
                row[clear_x] = " "
            for offset, char in enumerate(message):
                row[start + offset] = char

    return _join(grid)