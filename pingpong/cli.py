"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from enum import Enum

from pingpong.app import App
from pingpong.config import Config, ConfigError
from pingpong.ping import PingError
from pingpong.tui import AnimationType


class AnimationChoice(Enum):
    """Animation names accepted on the command line."""

    PLASMA = "plasma"
    GLOBE = "globe"
    BOUNCE = "bounce"
    MATRIX = "matrix"
    DNA = "dna"
    WAVEFORM = "waveform"

    def to_animation_type(self) -> AnimationType:
        return {
            AnimationChoice.PLASMA: AnimationType.PLASMA,
            AnimationChoice.GLOBE: AnimationType.GLOBE,
            AnimationChoice.BOUNCE: AnimationType.BOUNCING_LOGO,
            AnimationChoice.MATRIX: AnimationType.MATRIX,
            AnimationChoice.DNA: AnimationType.DNA,
            AnimationChoice.WAVEFORM: AnimationType.WAVEFORM,
        }[self]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line options."""
    parser = argparse.ArgumentParser(
        prog="pingpong",
        description="A beautiful TUI ping utility for monitoring network connectivity",
    )
    parser.add_argument(
        "-c", "--config", default="pingpong.toml", help="Configuration file path"
    )
    parser.add_argument(
        "-i", "--interval", type=float, default=1.0, help="Ping interval in seconds"
    )
    parser.add_argument(
        "--host",
        action="append",
        default=[],
        help="Additional hosts to ping (can be used multiple times)",
    )
    parser.add_argument(
        "-a",
        "--animation",
        type=AnimationChoice,
        choices=list(AnimationChoice),
        metavar="{" + ",".join(c.value for c in AnimationChoice) + "}",
        help="Animation type: plasma, globe, bounce, matrix, dna, or waveform",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load the configuration file, falling back to defaults, and apply options."""
    try:
        config = Config.load(args.config)
    except ConfigError:
        config = Config.default()
    for host in args.host:
        config.add_host(host)
    if args.interval != 1.0:
        config.set_interval(args.interval)
    return config


async def _run(config: Config, animation_type: AnimationType | None) -> None:
    app = await App.create(config, animation_type)
    await app.run()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the monitor; return the process exit status."""
    args = parse_args(argv)
    config = build_config(args)
    animation_type = args.animation.to_animation_type() if args.animation else None
    try:
        asyncio.run(_run(config, animation_type))
    except (PingError, OSError) as exc:
        cause = f": {exc.__cause__}" if exc.__cause__ else ""
        print(f"Error: {exc}{cause}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())