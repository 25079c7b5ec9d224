"""Terminal interface: status text, lore, animations and the full-screen display."""

from __future__ import annotations

import asyncio
import math
import random
import sys
import time
import unicodedata
from collections.abc import Mapping, Sequence
from contextlib import ExitStack
from dataclasses import dataclass, field
from enum import Enum

import blessed

from pingpong.animations_globe import generate_globe_animation
from pingpong.animations_motion import (
    generate_bouncing_rtt_animation,
    generate_matrix_animation,
)
from pingpong.animations_overlay import generate_connection_failure_overlay
from pingpong.animations_plasma import generate_plasma_animation
from pingpong.animations_signal import generate_dna_animation, generate_waveform_animation
from pingpong.stats import PingStats

BOUNCE_AREA_WIDTH = 80.0
BOUNCE_AREA_HEIGHT = 24.0

_HEADER_RULE = "═══════════════════════════════════════════════"
_HOST_SEPARATOR = "───────────────────────────────────────────────"


class AnimationType(Enum):
    PLASMA = "Plasma"
    GLOBE = "Globe"
    BOUNCING_LOGO = "BouncingLogo"
    MATRIX = "Matrix"
    DNA = "Dna"
    WAVEFORM = "Waveform"

    @classmethod
    def random(cls) -> AnimationType:
        """Pick one animation uniformly at random."""
        return random.choice(list(cls))


@dataclass
class TuiState:
    """Mutable display state, including the bouncing readout's motion."""

    animation_type: AnimationType
    selected_tab: int = 0
    selected_host: int = 0
    show_help: bool = False
    paused: bool = False
    animation_frame: int = 0
    last_frame_time: float = field(default_factory=time.monotonic)
    start_time: float = field(default_factory=time.monotonic)
    bounce_x: float = 20.0
    bounce_y: float = 8.0
    bounce_dx: float = 0.0
    bounce_dy: float = 0.0

    @classmethod
    def with_animation(cls, animation_type: AnimationType) -> TuiState:
        print(f"🎨 Selected animation: {animation_type.value}", file=sys.stderr)
        if animation_type is AnimationType.BOUNCING_LOGO:
            dx, dy = 1.5, 1.2
        else:
            dx, dy = 0.0, 0.0
        now = time.monotonic()
        return cls(
            animation_type=animation_type,
            last_frame_time=now,
            start_time=now,
            bounce_dx=dx,
            bounce_dy=dy,
        )

    def update_bounce_position(self) -> None:
        """Advance the bouncing readout one step, reflecting off the edges."""
        max_x = BOUNCE_AREA_WIDTH - 10.0
        max_y = BOUNCE_AREA_HEIGHT - 5.0
        self.bounce_x += self.bounce_dx
        self.bounce_y += self.bounce_dy
        if self.bounce_x <= 0.0 or self.bounce_x >= max_x:
            self.bounce_dx = -self.bounce_dx
        if self.bounce_y <= 0.0 or self.bounce_y >= max_y:
            self.bounce_dy = -self.bounce_dy
        self.bounce_x = min(max(self.bounce_x, 0.0), max_x)
        self.bounce_y = min(max(self.bounce_y, 0.0), max_y)


def _as_index(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**64 - 1
    return int(value)


def _fmt_ms(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:.1f}"


def calculate_average_rtt(stats: Mapping[str, PingStats]) -> float:
    """Mean of per-host average RTTs in milliseconds; 100 when nothing is known."""
    averages = [
        stat.rtt_stats().avg * 1000.0 for stat in stats.values() if stat.total_pings > 0
    ]
    if not averages:
        return 100.0
    return sum(averages) / len(averages)


def calculate_animation_speed(avg_rtt: float) -> int:
    """Milliseconds per animation frame for the given RTT."""
    if avg_rtt < 50.0:
        return 50
    if avg_rtt < 150.0:
        return 100
    return 200


def split_percentages(host_count: int) -> tuple[int, int]:
    """Return (pings, lore) height percentages for the left column."""
    ping = min(80, 40 + host_count * 8)
    return ping, 100 - ping


def _status_bar(loss: float, avg_ms: int) -> str:
    if loss < 1.0 and avg_ms < 100:
        return "   Status: ████████████ EXCELLENT"
    if loss < 5.0 and avg_ms < 200:
        return "   Status: ████████▓▓▓▓ GOOD"
    if loss < 10.0 and avg_ms < 500:
        return "   Status: ██████▓▓▓▓▓▓ FAIR"
    return "   Status: ████▓▓▓▓▓▓▓▓ POOR"


def render_pings_text(
    stats: Mapping[str, PingStats], host_info: Sequence[tuple[str, str]]
) -> str:
    """Build the text of the network status panel."""
    parts = ["🏓 Network Monitor\n", f"{_HEADER_RULE}\n\n"]
    for index, (host_id, host_name) in enumerate(host_info):
        dashes = "─" * (35 - min(len(host_name.encode("utf-8")), 25))
        stat = stats.get(host_id)
        if stat is not None:
            rtt = stat.rtt_stats()
            loss = stat.packet_loss_percent()
            parts.append(f"{stat.connection_quality().symbol()} {host_name} {dashes}\n")
            parts.append(
                f"   RTT: {rtt.avg * 1000.0:.1f}ms (avg) | Loss: {loss:.1f}% "
                f"| Pings: {stat.total_pings}\n"
            )
            parts.append(f"{_status_bar(loss, int(rtt.avg * 1000.0))}\n")
        else:
            parts.append(f"● {host_name} {dashes}\n")
            parts.append("   Status: ░░░░░░░░░░░░ WAITING\n")
        if index < len(host_info) - 1:
            parts.append(f"{_HOST_SEPARATOR}\n")
        parts.append("\n")
    parts.append("Controls: 'q' quit | 'h' help | 'space' pause")
    return "".join(parts)


_LORE = {
    AnimationType.PLASMA: (
        "⚡ Plasma Field Energy",
        "",
        "Digital energy flows through the",
        "network like plasma through space.",
        "Each packet creates ripples in the",
        "electromagnetic field of data.",
        "",
        "Fast connections create intense,",
        "rapidly shifting plasma patterns.",
        "Slow connections show gentle,",
        "slowly undulating energy waves.",
        "",
        "The plasma field reveals the true",
        "nature of your network's soul...",
    ),
    AnimationType.GLOBE: (
        "🌍 Digital Earth Network",
        "",
        "Your data travels the globe,",
        "spinning through fiber optic cables",
        "and satellite beams that connect",
        "every corner of our planet.",
        "",
        "Each ping is a digital heartbeat,",
        "pulsing across continents and",
        "through the ocean depths where",
        "undersea cables carry the world's",
        "conversations.",
        "",
        "The Earth spins, and so does",
        "your connection to the world...",
    ),
    AnimationType.BOUNCING_LOGO: (
        "📺 Retro Network Vibes",
        "",
        "Like a screensaver from the past,",
        "your network data bounces through",
        "the digital void, hitting walls",
        "and boundaries of protocols.",
        "",
        "Each bounce represents a hop",
        "through routers and switches,",
        "ricocheting across the internet's",
        "infrastructure like a digital",
        "pinball machine.",
        "",
        "Nostalgic packets, forever in",
        "motion through cyberspace...",
    ),
    AnimationType.MATRIX: (
        "💚 Matrix Digital Rain",
        "",
        "Wake up, Neo... Your network",
        "flows with cascading code that",
        "reveals the true nature of",
        "digital reality.",
        "",
        "Green characters fall like rain,",
        "each symbol a packet traversing",
        "the matrix of interconnected",
        "systems that bind our world.",
        "",
        "The faster your connection,",
        "the faster the code flows...",
        "Red pill or blue pill?",
    ),
    AnimationType.DNA: (
        "🧬 Network DNA Helix",
        "",
        "Your network connection has",
        "its own genetic code - a double",
        "helix of data packets and",
        "acknowledgments spiraling",
        "through digital space.",
        "",
        "Perfect connections show stable,",
        "graceful helical motion.",
        "Network issues manifest as",
        "mutations in the data stream.",
        "",
        "The backbone of digital life",
        "twists through fiber and air...",
    ),
    AnimationType.WAVEFORM: (
        "📊 Network Oscilloscope",
        "",
        "Your connection pulses like a",
        "heartbeat on an oscilloscope,",
        "showing the vital signs of",
        "data flowing through cables",
        "and wireless frequencies.",
        "",
        "Strong signals create bold,",
        "clear waveforms. Weak signals",
        "show irregular patterns and",
        "interference noise.",
        "",
        "Listen to the rhythm of your",
        "network's electronic pulse...",
    ),
}

_HELP = (
    "🏓 Pingpong Help",
    "",
    "CONTROLS:",
    "  Space       - Pause/resume pings",
    "  q           - Quit application",
    "  h / F1      - Toggle this help",
    "",
    "INDICATORS:",
    "  ●           - Good connection (< 2% loss, < 100ms)",
    "  ◐           - Fair connection (< 10% loss, < 500ms)",
    "  ○           - Poor connection (> 10% loss or > 500ms)",
    "",
    "Press 'h' or F1 to close this help",
)


def lore_text(animation_type: AnimationType) -> str:
    """Flavour text shown beside the given animation."""
    return "\n".join(_LORE[animation_type])


def help_text() -> str:
    """Text of the help screen."""
    return "\n".join(_HELP)


def render_animation(
    animation_type: AnimationType,
    animation_time: float,
    width: int,
    height: int,
    avg_rtt: float,
    bounce_pos: tuple[float, float],
) -> tuple[str, str, str]:
    """Return (art, title, colour name) for the animation panel."""
    ms = _fmt_ms(avg_rtt)
    match animation_type:
        case AnimationType.PLASMA:
            art = generate_plasma_animation(animation_time, width, height)
            title = f" Plasma Field - RTT: {ms}ms "
        case AnimationType.GLOBE:
            art = generate_globe_animation(animation_time, width, height)
            title = f" Digital Earth - RTT: {ms}ms "
        case AnimationType.BOUNCING_LOGO:
            art = generate_bouncing_rtt_animation(bounce_pos, width, height, avg_rtt)
            title = f" Bouncing RTT - {ms}ms "
        case AnimationType.MATRIX:
            art = generate_matrix_animation(animation_time, width, height, avg_rtt)
            title = f" Matrix Code - RTT: {ms}ms "
        case AnimationType.DNA:
            art = generate_dna_animation(animation_time, width, height, avg_rtt)
            title = f" DNA Helix - RTT: {ms}ms "
        case _:
            art = generate_waveform_animation(animation_time, width, height, avg_rtt)
            title = f" Network Pulse - RTT: {ms}ms "

    failed = avg_rtt <= 0.0 or math.isnan(avg_rtt) or math.isinf(avg_rtt)
    if failed:
        if _as_index(animation_time * 2.0) % 2 == 0:
            art = generate_connection_failure_overlay(art, width, height)
        return art, " CONNECTION FAILED! ", "red"
    if avg_rtt < 50.0:
        color = "green"
    elif avg_rtt < 150.0:
        color = "yellow"
    else:
        color = "red"
    return art, title, color


def _char_width(char: str) -> int:
    if unicodedata.combining(char) or char in "\u200d\ufe0f":
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def _clip(text: str, cells: int) -> tuple[str, int]:
    """Cut text to at most ``cells`` terminal columns; return it and its width."""
    kept = []
    used = 0
    for char in text:
        w = _char_width(char)
        if used + w > cells:
            break
        kept.append(char)
        used += w
    return "".join(kept), used


class TuiApp:
    """Full-screen terminal display; restore the terminal with close() or a with block."""

    def __init__(self, animation_type: AnimationType | None = None) -> None:
        self._term = blessed.Terminal()
        self._stack = ExitStack()
        try:
            self._stack.enter_context(self._term.cbreak())
            self._stack.enter_context(self._term.fullscreen())
            self._stack.enter_context(self._term.hidden_cursor())
        except BaseException:
            self._stack.close()
            raise
        chosen = animation_type if animation_type is not None else AnimationType.random()
        self.state = TuiState.with_animation(chosen)
        self.host_info: list[tuple[str, str]] = []

    def set_host_info(self, host_info: Sequence[tuple[str, str]]) -> None:
        self.host_info = list(host_info)

    async def draw(self, stats: Mapping[str, PingStats]) -> None:
        """Advance the animation clock and redraw the whole screen."""
        state = self.state
        avg_rtt = calculate_average_rtt(stats)
        speed = calculate_animation_speed(avg_rtt)
        now = time.monotonic()
        if int((now - state.last_frame_time) * 1000) > speed:
            state.animation_frame += 1
            state.last_frame_time = now
            if state.animation_type is AnimationType.BOUNCING_LOGO:
                state.update_bounce_position()

        if state.show_help:
            frame = self._render_help()
        else:
            frame = self._render_main(stats, now - state.start_time, avg_rtt)
        self._term.stream.write(frame)
        self._term.stream.flush()

    async def handle_events(self) -> bool:
        """Wait briefly for a key; return True when the user asked to quit."""
        term = self._term
        key = await asyncio.to_thread(term.inkey, timeout=0.05)
        if not key:
            return False
        if key == "q":
            return True
        if key == "h" or key.code == term.KEY_F1:
            self.state.show_help = not self.state.show_help
        elif key == " ":
            self.state.paused = not self.state.paused
        return False

    def close(self) -> None:
        """Leave the full screen and restore terminal modes."""
        self._stack.close()

    def __enter__(self) -> TuiApp:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _style(self, color: str | None) -> str:
        term = self._term
        styles = {"green": term.green, "yellow": term.yellow, "red": term.red, "cyan": term.cyan}
        return str(styles[color]) if color else ""

    def _box(
        self,
        left: int,
        top: int,
        width: int,
        height: int,
        title: str,
        body: str,
        color: str | None,
        centered: bool,
    ) -> str:
        if width < 2 or height < 2:
            return ""
        term = self._term
        inner = width - 2
        style = self._style(color)
        normal = str(term.normal)

        title_text, title_w = _clip(title, inner)
        out = [
            term.move_xy(left, top) + style + "┌" + title_text + "─" * (inner - title_w) + "┐"
        ]
        lines = body.split("\n")
        for row in range(height - 2):
            text, used = _clip(lines[row] if row < len(lines) else "", inner)
            if centered:
                pad_left = (inner - used) // 2
                content = " " * pad_left + text + " " * (inner - used - pad_left)
            else:
                content = text + " " * (inner - used)
            out.append(term.move_xy(left, top + 1 + row) + style + "│" + content + "│")
        out.append(term.move_xy(left, top + height - 1) + style + "└" + "─" * inner + "┘")
        return "".join(out) + normal

    def _render_main(
        self, stats: Mapping[str, PingStats], animation_time: float, avg_rtt: float
    ) -> str:
        width, height = self._term.width, self._term.height
        left_w = width * 50 // 100
        right_w = width - left_w
        ping_pct, _ = split_percentages(len(self.host_info))
        top_h = height * ping_pct // 100
        bottom_h = height - top_h

        state = self.state
        art, title, color = render_animation(
            state.animation_type,
            animation_time,
            right_w,
            height,
            avg_rtt,
            (state.bounce_x, state.bounce_y),
        )
        return "".join(
            (
                self._box(
                    0, 0, left_w, top_h, " Network Status ",
                    render_pings_text(stats, self.host_info), "green", False,
                ),
                self._box(
                    0, top_h, left_w, bottom_h, " Network Lore ",
                    lore_text(state.animation_type), "cyan", False,
                ),
                self._box(left_w, 0, right_w, height, title, art, color, True),
            )
        )

    def _render_help(self) -> str:
        term = self._term
        return self._box(0, 0, term.width, term.height, " Help ", help_text(), None, False)