"""Signal-themed animations: a rotating DNA helix and an oscilloscope waveform."""

from __future__ import annotations

import math
import random
from typing import Protocol

from pingpong.animations_motion import effective_size

BACKBONE_CHARS = "│║|"
BOND_CHARS = "─═~≈"
BASE_PAIRS = (("A", "T"), ("T", "A"), ("G", "C"), ("C", "G"))
MUTATION = "×"

_WORD_MASK = 2**64 - 1
_ISIZE_MAX = 2**63 - 1
_ISIZE_MIN = -(2**63)


class _RandomBits(Protocol):
    def getrandbits(self, k: int) -> int: ...


def _as_index(value: float) -> int:
    """Convert a float to a non-negative integer, saturating at zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return _WORD_MASK
    return int(value)


def _as_signed(value: float) -> int:
    """Truncate a float towards zero, saturating; NaN becomes zero."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _ISIZE_MAX if value > 0 else _ISIZE_MIN
    return int(value)


def _max_ignoring_nan(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def _sin(value: float) -> float:
    return math.sin(value) if math.isfinite(value) else math.nan


def _fmt_ms(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:.1f}"


def _overlay_centered(row: list[str], width: int, text: str) -> None:
    if width > len(text):
        start = (width - len(text)) // 2
        for offset, char in enumerate(text):
            if start + offset < len(row):
                row[start + offset] = char


def _join(grid: list[list[str]]) -> str:
    return "\n".join("".join(row) for row in grid)


def generate_dna_animation(
    time: float,
    width: int,
    height: int,
    avg_rtt: float,
    rng: _RandomBits | None = None,
) -> str:
    """Draw a twisting double helix; high RTT scatters random mutation markers."""
    source = rng if rng is not None else random
    eff_w, eff_h = effective_size(width, height)
    grid = [[" "] * eff_w for _ in range(eff_h)]

    center_x = eff_w // 2
    helix_width = min(max(eff_w // 4, 3), 8)
    rotation_speed = 2.0 if avg_rtt < 50.0 else 1.0
    backbone = BACKBONE_CHARS
    time_step = _as_index(time * 2.0)

    for y, row in enumerate(grid):
        t = time + y * 0.3
        left_x = _as_index(center_x + _sin(t * rotation_speed) * helix_width)
        right_x = _as_index(center_x + _sin(t * rotation_speed + math.pi) * helix_width)

        strand = backbone[(y + time_step) % len(backbone)]
        if left_x < len(row):
            row[left_x] = strand
        if right_x < len(row):
            row[right_x] = strand

        distance = abs(left_x - right_x)
        if 1 < distance <= helix_width:
            low, high = min(left_x, right_x), max(left_x, right_x)
            for bond_x in range(low + 1, high):
                if bond_x < len(row):
                    row[bond_x] = BOND_CHARS[(y + bond_x) % len(BOND_CHARS)]

            left_base, right_base = BASE_PAIRS[(y + _as_index(time * 0.5)) % len(BASE_PAIRS)]
            if left_x > 0 and left_x - 1 < len(row):
                row[left_x - 1] = left_base
            if right_x + 1 < len(row):
                row[right_x + 1] = right_base

    if avg_rtt > 100.0:
        mutation_rate = min((avg_rtt - 100.0) / 100.0, 0.5)
        for _ in range(_as_index(eff_h * mutation_rate)):
            y = ((_as_index(time * 3.0) + source.getrandbits(64)) & _WORD_MASK) % eff_h
            x = source.getrandbits(64) % eff_w
            grid[y][x] = MUTATION

    if eff_h > 2:
        if avg_rtt < 50.0:
            quality = "STABLE"
        elif avg_rtt < 150.0:
            quality = "DEGRADED"
        else:
            quality = "MUTATING"
        _overlay_centered(grid[eff_h - 1], eff_w, f"DNA:{quality} RTT:{_fmt_ms(avg_rtt)}ms")

    return _join(grid)


def generate_waveform_animation(time: float, width: int, height: int, avg_rtt: float) -> str:
    """Draw an oscilloscope trace whose frequency and labels follow the RTT.

    Raises ValueError when the area is too small to lay out the scope grid.
    """
    eff_w, eff_h = effective_size(width, height)
    grid_step_y, grid_step_x = eff_h // 4, eff_w // 8
    if grid_step_y == 0 or grid_step_x == 0:
        raise ValueError(
            f"animation area {eff_w}x{eff_h} is too small for the oscilloscope grid"
        )

    grid = [[" "] * eff_w for _ in range(eff_h)]
    center_y = eff_h // 2
    amplitude = max(eff_h // 3, 2)

    if avg_rtt < 50.0:
        frequency = 0.3
    elif avg_rtt < 150.0:
        frequency = 0.2
    else:
        frequency = 0.1

    for x in range(eff_w):
        phase = time * 2.0 + x * frequency
        primary = _as_signed(_sin(phase) * amplitude)
        harmonic = _sin(phase * 2.0 + time) * (amplitude * 0.3)
        combined = primary + _as_signed(harmonic)

        y_pos = min(max(center_y + combined, 0), eff_h - 1)
        intensity = min(abs(combined) / amplitude, 1.0)
        if intensity > 0.8:
            wave_char = "█"
        elif intensity > 0.6:
            wave_char = "▓"
        elif intensity > 0.3:
            wave_char = "▒"
        else:
            wave_char = "░"
        grid[y_pos][x] = wave_char

        if _as_index(time * 5.0 + x * 0.1) % 20 < 3:
            for py in range(2 + x % 3):
                packet_row = grid[min(center_y + py, eff_h - 1)]
                if packet_row[x] == " ":
                    packet_row[x] = "|"

    for y in range(0, eff_h, grid_step_y):
        row = grid[y]
        for x in range(0, eff_w, grid_step_x):
            if row[x] == " ":
                row[x] = "·"

    center_row = grid[center_y]
    for x in range(0, eff_w, 4):
        if center_row[x] == " ":
            center_row[x] = "─"

    if eff_h > 3:
        if avg_rtt < 50.0:
            signal = "STRONG"
        elif avg_rtt < 150.0:
            signal = "MEDIUM"
        else:
            signal = "WEAK"
        hertz = _as_index(1000.0 / _max_ignoring_nan(avg_rtt, 1.0))
        top = f"SIG:{signal} {_as_index(time * 10.0) % 100}kHz"
        bottom = f"RTT:{_fmt_ms(avg_rtt)}ms {hertz}Hz"
        _overlay_centered(grid[0], eff_w, top)
        _overlay_centered(grid[eff_h - 1], eff_w, bottom)

    return _join(grid)