"""Configuration loading, saving and host list management."""

from __future__ import annotations

import tomllib
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

_U16_MAX = 0xFFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


class ConfigError(Exception):
    """Raised when a configuration file cannot be read, parsed or written."""


@dataclass
class PingConfig:
    """Global ping settings."""

    interval: float
    timeout: float
    history_size: int
    packet_size: int


@dataclass
class Host:
    """A host to monitor."""

    name: str
    address: str
    enabled: bool = True
    interval: float | None = None


@dataclass
class UiConfig:
    """User interface settings."""

    refresh_rate: int
    theme: str
    show_details: bool = True
    graph_height: int = 10


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise ConfigError(f"missing or invalid table '{key}'")
    return value


def _required(table: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in table:
        raise ConfigError(f"missing field '{key}' in {where}")
    return table[key]


def _as_float(value: Any, key: str, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"field '{key}' in {where} must be a number")
    return float(value)


def _as_uint(value: Any, key: str, where: str, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise ConfigError(f"field '{key}' in {where} must be an integer in 0..={maximum}")
    return value


def _as_str(value: Any, key: str, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"field '{key}' in {where} must be a string")
    return value


def _as_bool(value: Any, key: str, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"field '{key}' in {where} must be a boolean")
    return value


def _parse_host(entry: Any) -> Host:
    where = "hosts"
    if not isinstance(entry, Mapping):
        raise ConfigError("each entry of 'hosts' must be a table")
    interval = entry.get("interval")
    return Host(
        name=_as_str(_required(entry, "name", where), "name", where),
        address=_as_str(_required(entry, "address", where), "address", where),
        enabled=_as_bool(entry.get("enabled", True), "enabled", where),
        interval=None if interval is None else _as_float(interval, "interval", where),
    )


@dataclass
class Config:
    """Complete application configuration."""

    ping: PingConfig
    hosts: list[Host] = field(default_factory=list)
    ui: UiConfig = field(default_factory=lambda: UiConfig(100, "auto", True, 10))

    @classmethod
    def default(cls) -> Config:
        """Return the built-in configuration."""
        return cls(
            ping=PingConfig(interval=1.0, timeout=3.0, history_size=300, packet_size=32),
            hosts=[
                Host("Google DNS", "8.8.8.8"),
                Host("Cloudflare DNS", "1.1.1.1"),
                Host("Google", "google.com"),
            ],
            ui=UiConfig(refresh_rate=100, theme="auto", show_details=True, graph_height=10),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a configuration from parsed TOML data, validating every field."""
        ping = _table(data, "ping")
        ui = _table(data, "ui")
        hosts = _required(data, "hosts", "config")
        if not isinstance(hosts, list):
            raise ConfigError("field 'hosts' must be an array of tables")
        return cls(
            ping=PingConfig(
                interval=_as_float(_required(ping, "interval", "ping"), "interval", "ping"),
                timeout=_as_float(_required(ping, "timeout", "ping"), "timeout", "ping"),
                history_size=_as_uint(
                    _required(ping, "history_size", "ping"), "history_size", "ping", _U64_MAX
                ),
                packet_size=_as_uint(
                    _required(ping, "packet_size", "ping"), "packet_size", "ping", _U16_MAX
                ),
            ),
            hosts=[_parse_host(entry) for entry in hosts],
            ui=UiConfig(
                refresh_rate=_as_uint(
                    _required(ui, "refresh_rate", "ui"), "refresh_rate", "ui", _U64_MAX
                ),
                theme=_as_str(_required(ui, "theme", "ui"), "theme", "ui"),
                show_details=_as_bool(ui.get("show_details", True), "show_details", "ui"),
                graph_height=_as_uint(
                    _required(ui, "graph_height", "ui"), "graph_height", "ui", _U16_MAX
                ),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as TOML-ready data; unset host intervals are left out."""
        hosts = []
        for host in self.hosts:
            entry: dict[str, Any] = {
                "name": host.name,
                "address": host.address,
                "enabled": host.enabled,
            }
            if host.interval is not None:
                entry["interval"] = host.interval
            hosts.append(entry)
        return {
            "ping": {
                "interval": self.ping.interval,
                "timeout": self.ping.timeout,
                "history_size": self.ping.history_size,
                "packet_size": self.ping.packet_size,
            },
            "hosts": hosts,
            "ui": {
                "refresh_rate": self.ui.refresh_rate,
                "theme": self.ui.theme,
                "show_details": self.ui.show_details,
                "graph_height": self.ui.graph_height,
            },
        }

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Read and parse a TOML configuration file."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Failed to read config file: {path}") from exc
        try:
            return cls.from_dict(tomllib.loads(content))
        except (tomllib.TOMLDecodeError, ConfigError) as exc:
            raise ConfigError(f"Failed to parse config file: {path}") from exc

    def save(self, path: str | Path) -> None:
        """Write the configuration to a TOML file."""
        path = Path(path)
        try:
            content = tomli_w.dumps(self.to_dict())
        except (TypeError, ValueError) as exc:
            raise ConfigError("Failed to serialize config") from exc
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to write config file: {path}") from exc

    def add_host(self, address: str) -> None:
        """Append an enabled host; bare IPv4-like addresses get an "IP " name."""
        if all(c.isascii() and (c.isdigit() or c == ".") for c in address):
            name = f"IP {address}"
        else:
            name = address
        self.hosts.append(Host(name=name, address=address))

    def set_interval(self, interval: float) -> None:
        """Set the global ping interval in seconds."""
        self.ping.interval = interval

    def enabled_hosts(self) -> Iterator[Host]:
        """Yield the hosts that are enabled, in order."""
        return (host for host in self.hosts if host.enabled)