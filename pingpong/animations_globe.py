"""Rotating globe animation with day/night, clouds, aurora and orbiting craft."""

from __future__ import annotations

import math

from pingpong.animations_motion import effective_size

CONTINENT_LAYERS = (
    "▓█▆▅▄▃▂▁",
    "▰▱▮▯◪◫◨◧",
    "⬛⬜◼◻▪▫■□",
)

OCEAN_LAYERS = (
    "~≈∼◦∘○◯●",
    "░▒▓█▆▅▄▃",
    "⋅∙•◘◙○◯●",
)

ATMOSPHERE_CHARS = "⋅∘○◯●◉⬡⬢"
CLOUD_PATTERNS = "☁⛅⛈🌤⋅∘  "
STAR_CHARS = "✦✧✩✪✫✬✭✮*·"
AURORA_CHARS = "◉⚡✦◯●"
PULSE_CHARS = "◐◓◑◒◉●○◯"

SATELLITE = "🛰"
ROCKET = "🚀"


def _as_index(value: float) -> int:
    """Convert a float to a non-negative integer, saturating at zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**64 - 1
    return int(value)


def _div(a: float, b: float) -> float:
    """Floating division that yields NaN or infinity instead of raising."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _sin(value: float) -> float:
    return math.sin(value) if math.isfinite(value) else math.nan


def _cos(value: float) -> float:
    return math.cos(value) if math.isfinite(value) else math.nan


def _asin(value: float) -> float:
    if math.isnan(value) or not -1.0 <= value <= 1.0:
        return math.nan
    return math.asin(value)


def _clamp_unit(value: float) -> float:
    """Clamp to [-1, 1]; NaN collapses to the lower bound."""
    if math.isnan(value):
        return -1.0
    return min(max(value, -1.0), 1.0)


def _coordinates(dx: float, dy: float, radius: int, time: float) -> tuple[float, float]:
    r = float(radius)
    longitude = math.atan2(_div(dx, r), _div(-dy, r)) + time * 0.2
    latitude = _asin(_div(dy, r))
    return longitude, latitude


def _surface_char(
    x: int, y: int, dx: float, dy: float, distance: float, radius: int, time: float
) -> str:
    longitude, latitude = _coordinates(dx, dy, radius, time)

    noise1 = _sin(longitude * 2.0) * _cos(latitude * 3.0)
    noise2 = _cos(longitude * 3.0 + 1.5) * _sin(latitude * 2.0)
    noise3 = _sin(longitude * 1.5 - 0.7) * _cos(latitude * 4.0)
    land_probability = (noise1 + noise2 * 0.7 + noise3 * 0.5) * 0.6

    day_night = _cos(longitude - time * 0.15)
    is_day = day_night > 0.0
    terminator_blend = _clamp_unit(day_night * 3.0)

    cloud_noise = _sin(longitude * 4.0 + time * 0.3) * _cos(latitude * 3.0)
    has_clouds = cloud_noise > 0.6 and (x + y + _as_index(time * 3.0)) % 8 < 3

    ocean_current = _sin(longitude * 2.0 + time * 0.5) * 0.5

    if has_clouds:
        return CLOUD_PATTERNS[_as_index((cloud_noise + 1.0) * 4.0) % len(CLOUD_PATTERNS)]

    if land_probability > 0.1:
        terrain = CONTINENT_LAYERS[
            _as_index(abs(latitude) * 2.0 + longitude * 1.5) % len(CONTINENT_LAYERS)
        ]
        elevation = _as_index((land_probability + 1.0) * 4.0) % len(terrain)
        if is_day or terminator_blend > -0.5:
            return terrain[elevation]
        if elevation > 4 and (x + y + _as_index(time * 2.0)) % 12 == 0:
            return "●"
        return "▓"

    ocean = OCEAN_LAYERS[_as_index(ocean_current + 1.0) % len(OCEAN_LAYERS)]
    wave = _as_index((_div(distance, float(radius)) + time) * 4.0) % len(ocean)
    return ocean[wave]


def _atmosphere_char(dx: float, dy: float, distance: float, radius: int, time: float) -> str:
    atmo_distance = distance - radius
    longitude, latitude = _coordinates(dx, dy, radius, time)
    aurora = _sin(longitude * 4.0 + time) * _cos(latitude * 2.0)
    if atmo_distance < 1.0 and aurora > 0.8 and abs(latitude) > 0.6:
        return AURORA_CHARS[_as_index(time * 5.0) % len(AURORA_CHARS)]
    return ATMOSPHERE_CHARS[_as_index(atmo_distance * 4.0) % len(ATMOSPHERE_CHARS)]


def _space_char(x: int, y: int, time: float) -> str:
    seed = x * 17 + y * 23 + _as_index(time * 1.25)
    if seed % 25 == 0:
        return STAR_CHARS[seed % len(STAR_CHARS)]
    if seed % 47 == 0 and _as_index(time) % 15 < 3:
        return SATELLITE
    return " "


def _cell(x: int, y: int, time: float, cx: int, cy: int, radius: int) -> str:
    dx = float(x - cx)
    dy = float(y - cy)
    distance = math.hypot(dx, dy)
    if distance <= radius:
        return _surface_char(x, y, dx, dy, distance, radius, time)
    if distance <= radius + 2:
        return _atmosphere_char(dx, dy, distance, radius, time)
    return _space_char(x, y, time)


def _time_of_day(time: float) -> str:
    hour = _as_index(time * 0.1) % 24
    if hour <= 5:
        return "🌙 Night"
    if hour <= 11:
        return "🌅 Dawn"
    if hour <= 17:
        return "☀️ Day"
    return "🌆 Dusk"


def generate_globe_animation(time: float, width: int, height: int) -> str:
    """Draw a rotating Earth with a space backdrop and a network status line."""
    eff_w, eff_h = effective_size(width, height)
    cx, cy = eff_w // 2, eff_h // 2
    radius = max(min(cx, cy) - 2, 0)

    grid = [[_cell(x, y, time, cx, cy, radius) for x in range(eff_w)] for y in range(eff_h)]

    if eff_h > 6 and eff_w > 20:
        orbit = radius + 3.0
        iss_x = _as_index(cx + orbit * _cos(time))
        iss_y = _as_index(cy + orbit * _sin(time) * 0.5)
        if iss_x < eff_w and iss_y < eff_h:
            grid[iss_y][iss_x] = ROCKET

    if eff_h > 3:
        pulse = PULSE_CHARS[_as_index(time * 3.0) % len(PULSE_CHARS)]
        status = f"Global Network {pulse} {_time_of_day(time)}"
        byte_len = len(status.encode("utf-8"))
        if eff_w > byte_len:
            start = (eff_w - byte_len) // 2
            row = grid[eff_h - 1]
            for offset, char in enumerate(status):
                if start + offset < len(row):
                    row[start + offset] = char

    return "\n".join("".join(row) for row in grid)