"""Plasma field animation built from interfering sine waves."""

from __future__ import annotations

import math

from pingpong.animations_motion import effective_size

PLASMA_LAYERS = (
    " ░▒▓█▓▒░ ",
    "·•○●◉⚫◯○·",
    " ▁▂▃▄▅▆▇█",
    " ▖▗▘▝▞▟▙█",
    "˙∘○◌◯●◉⬢⬡",
)

FX_CHARS = "✦✧✩✪✫✬✭✮✯✰✱✲⚡⟡⟢⟣"

NODE_CHARS = "◉⚡✦●⟡◯"

FLOW_CHARS = "─━═▬▭"


def _as_index(value: float) -> int:
    """Convert a float to a non-negative integer, saturating at zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**64 - 1
    return int(value)


def _intensity(x: int, y: int, time: float) -> float:
    wave1 = math.sin(x * 0.3 + time * 1.5)
    wave2 = math.sin(y * 0.25 + time * 1.8)
    wave3 = math.sin((x + y) * 0.15 + time * 0.9)
    wave4 = math.sin(math.cos(x * 0.1) + math.cos(y * 0.12) + time * 2.1)
    wave5 = math.sin(math.sqrt(x * x + y * y) * 0.2 - time * 1.2)
    turbulence = math.sin(math.sin(x * 0.05) * math.cos(y * 0.07) + time * 0.5) * 0.3
    return (
        wave1 * 2.0 + wave2 * 1.8 + wave3 * 1.5 + wave4 * 1.2 + wave5 * 0.8 + turbulence
    ) * 0.8


def _plasma_char(x: int, y: int, time: float, time_int: int) -> str:
    intensity = _intensity(x, y, time)
    scaled = (intensity + 3.0) * 1.33
    char_index = 0 if math.isnan(scaled) else int(min(max(scaled, 0.0), 8.0))
    layer = PLASMA_LAYERS[(x + y + time_int // 3) % len(PLASMA_LAYERS)]
    if intensity > 2.0 and (x + y + time_int) % 7 == 0:
        return FX_CHARS[time_int % len(FX_CHARS)]
    if intensity > 1.5 and (x * 2 + y + time_int // 2) % 11 == 0:
        return FX_CHARS[(time_int // 2) % len(FX_CHARS)]
    return layer[char_index]


def generate_plasma_animation(time: float, width: int, height: int) -> str:
    """Draw a shifting plasma field with roaming energy nodes and flowing borders."""
    eff_w, eff_h = effective_size(width, height)
    time_int = _as_index(time * 10.0)

    grid = [[_plasma_char(x, y, time, time_int) for x in range(eff_w)] for y in range(eff_h)]

    num_nodes = 3 + _as_index(time * 0.5) % 3
    for node in range(num_nodes):
        node_time = time + node * 2.0
        node_x = _as_index(
            math.sin(node_time * 0.7) * (eff_w - 10.0) / 2.0 + eff_w / 2.0
        )
        node_y = _as_index(
            math.cos(node_time * 0.9 + node) * (eff_h - 6.0) / 2.0 + eff_h / 2.0
        )
        if node_x < eff_w and node_y < eff_h:
            char = NODE_CHARS[(_as_index(time * 3.0) + node * 3) % len(NODE_CHARS)]
            grid[node_y][node_x] = char

    if eff_h > 4 and eff_w > 8:
        flow_char = FLOW_CHARS[(_as_index(time * 5.0) // 2) % len(FLOW_CHARS)]
        top, bottom = grid[0], grid[-1]
        for x in range(eff_w):
            if (x + time_int) % 4 < 2:
                top[x] = flow_char
            if (x + time_int + 2) % 4 < 2:
                bottom[x] = flow_char

    return "\n".join("".join(row) for row in grid)