"""Flashing failure overlay drawn over an animation when the connection is down."""

from __future__ import annotations

import random
from typing import Protocol

from pingpong.animations_motion import effective_size

FAILURE_MESSAGES = (
    "CONNECTION LOST",
    "NETWORK FAILURE",
    "PING TIMEOUT",
    "NO RESPONSE",
)

BLOCK = "█"
WARNING_TOP = "⚠"
WARNING_LEFT = "!"
WARNING_RIGHT = "×"
WARNING_BOTTOM = "✗"


class _RandomBits(Protocol):
    def getrandbits(self, k: int) -> int: ...


def _split_lines(text: str) -> list[list[str]]:
    """Split into rows of characters; a single trailing newline adds no row."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [list(part[:-1] if part.endswith("\r") else part) for part in parts]


def _pad(row: list[str], width: int) -> None:
    if len(row) < width:
        row.extend(" " * (width - len(row)))


def generate_connection_failure_overlay(
    base_animation: str,
    width: int,
    height: int,
    rng: _RandomBits | None = None,
) -> str:
    """Draw a large X, a failure message and warning marks over an animation."""
    source = rng if rng is not None else random
    eff_w, eff_h = effective_size(width, height)
    lines = _split_lines(base_animation)
    while len(lines) < eff_h:
        lines.append([" "] * eff_w)

    center_x, center_y = eff_w // 2, eff_h // 2
    size = max(min(eff_w, eff_h) // 2, 3)
    half = size // 2

    for i in range(size):
        y = center_y - half + i
        if not 0 <= y < len(lines):
            continue
        for x in (center_x - half + i, center_x + half - i):
            if 0 <= x < eff_w:
                row = lines[y]
                _pad(row, eff_w)
                row[x] = BLOCK

    if eff_h > 3:
        message = FAILURE_MESSAGES[source.getrandbits(64) % len(FAILURE_MESSAGES)]
        bottom_y = eff_h - 2
        if bottom_y < len(lines) and eff_w > len(message):
            start = (eff_w - len(message)) // 2
            row = lines[bottom_y]
            _pad(row, eff_w)
            for offset, char in enumerate(message):
                if start + offset < len(row):
                    row[start + offset] = char

    if eff_h > 1 and eff_w > 6:
        if center_y > 0:
            row = lines[center_y - 1]
            _pad(row, eff_w)
            if center_x < len(row):
                row[center_x] = WARNING_TOP

        if center_y < len(lines):
            row = lines[center_y]
            _pad(row, eff_w)
            if center_x > 2 and center_x - 3 < len(row):
                row[center_x - 3] = WARNING_LEFT
            if center_x + 3 < len(row):
                row[center_x + 3] = WARNING_RIGHT

        if center_y + 1 < len(lines):
            row = lines[center_y + 1]
            _pad(row, eff_w)
            if center_x < len(row):
                row[center_x] = WARNING_BOTTOM

    return "\n".join("".join(row) for row in lines)