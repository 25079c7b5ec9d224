"""ICMP echo engine: resolves hosts, pings them on a schedule and reports events."""

from __future__ import annotations

import asyncio
import copy
import ipaddress
import socket
import struct
import sys
import time
import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from pingpong.config import Host, PingConfig
from pingpong.stats import PingResult, PingStats

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

_ECHO_REQUEST_V4 = 8
_ECHO_REPLY_V4 = 0
_ECHO_REQUEST_V6 = 128
_ECHO_REPLY_V6 = 129
_SEQUENCE_MODULUS = 0x10000


class PingError(Exception):
    """Raised when a host cannot be resolved or a ping cannot be sent."""


@dataclass(frozen=True)
class PingEvent:
    """A ping result for one host, as sent to listeners."""

    host_id: str
    host_name: str
    result: PingResult


def generate_host_id(address: str) -> str:
    """Return a stable identifier derived from the host address."""
    return f"host_{uuid.uuid5(uuid.NAMESPACE_DNS, address)}"


async def resolve_hostname(hostname: str) -> IPAddress:
    """Return the first address for a host name, or the address itself if it is one."""
    try:
        return ipaddress.ip_address(hostname)
    except ValueError:
        pass
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(hostname, None)
    except (socket.gaierror, UnicodeError, OSError) as exc:
        raise PingError(f"DNS lookup failed for {hostname}") from exc
    for *_, sockaddr in infos:
        try:
            return ipaddress.ip_address(sockaddr[0])
        except ValueError:
            continue
    raise PingError(f"No IP addresses found for {hostname}")


def icmp_checksum(data: bytes) -> int:
    """Compute the 16-bit one's complement Internet checksum."""
    if len(data) % 2:
        data += b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def _echo_packet(kind: int, identifier: int, sequence: int, payload: bytes) -> bytes:
    header = struct.pack("!BBHHH", kind, 0, 0, identifier & 0xFFFF, sequence & 0xFFFF)
    checksum = icmp_checksum(header + payload)
    return struct.pack("!BBHHH", kind, 0, checksum, identifier & 0xFFFF, sequence & 0xFFFF) + payload


def build_echo_request(identifier: int, sequence: int, payload: bytes = b"") -> bytes:
    """Build an ICMPv4 echo request packet with a valid checksum."""
    return _echo_packet(_ECHO_REQUEST_V4, identifier, sequence, payload)


def _open_socket(family: int, proto: int) -> tuple[socket.socket, bool]:
    """Open an ICMP socket, preferring the unprivileged datagram kind."""
    try:
        sock = socket.socket(family, socket.SOCK_DGRAM, proto)
        raw = False
    except OSError:
        try:
            sock = socket.socket(family, socket.SOCK_RAW, proto)
            raw = True
        except OSError as exc:
            raise PingError(f"cannot open ICMP socket: {exc}") from exc
    sock.setblocking(False)
    return sock, raw


async def ping_once(
    address: IPAddress | str, identifier: int, sequence: int, timeout: float
) -> float:
    """Send one echo request and return the round-trip time in seconds.

    Raises TimeoutError when no reply arrives in time and PingError on socket failures.
    """
    ip = ipaddress.ip_address(address) if isinstance(address, str) else address
    if ip.version == 4:
        family, proto = socket.AF_INET, socket.IPPROTO_ICMP
        request_kind, reply_kind = _ECHO_REQUEST_V4, _ECHO_REPLY_V4
    else:
        family, proto = socket.AF_INET6, socket.IPPROTO_ICMPV6
        request_kind, reply_kind = _ECHO_REQUEST_V6, _ECHO_REPLY_V6

    sock, raw = _open_socket(family, proto)
    loop = asyncio.get_running_loop()
    with sock:
        packet = _echo_packet(request_kind, identifier, sequence, b"")
        start = time.perf_counter()
        try:
            await loop.sock_sendto(sock, packet, (str(ip), 0))
        except OSError as exc:
            raise PingError(str(exc)) from exc
        async with asyncio.timeout(timeout):
            while True:
                try:
                    data = await loop.sock_recv(sock, 4096)
                except OSError as exc:
                    raise PingError(str(exc)) from exc
                rtt = time.perf_counter() - start
                if raw and family == socket.AF_INET and data:
                    data = data[(data[0] & 0x0F) * 4 :]
                if len(data) < 8:
                    continue
                kind, _code, _checksum, ident, seq = struct.unpack("!BBHHH", data[:8])
                if kind != reply_kind or seq != sequence & 0xFFFF:
                    continue
                if raw and ident != identifier & 0xFFFF:
                    continue
                return rtt


class PingEngine:
    """Pings every enabled host concurrently and publishes a PingEvent per attempt."""

    def __init__(
        self,
        hosts: list[Host],
        ping_config: PingConfig,
        events: asyncio.Queue[PingEvent],
    ) -> None:
        self.hosts = hosts
        self.ping_config = ping_config
        self.events = events
        self._stats: dict[str, PingStats] = {
            generate_host_id(host.address): PingStats(ping_config.history_size)
            for host in hosts
        }

    @classmethod
    async def create(
        cls,
        hosts: Iterable[Host],
        ping_config: PingConfig,
        events: asyncio.Queue[PingEvent],
    ) -> PingEngine:
        """Resolve every host up front and build the engine."""
        hosts = list(hosts)
        for host in hosts:
            try:
                await resolve_hostname(host.address)
            except PingError as exc:
                raise PingError(f"Failed to resolve hostname: {host.address}") from exc
        return cls(hosts, ping_config, events)

    async def start(self) -> None:
        """Run one ping loop per enabled host until cancelled."""
        tasks = [
            asyncio.create_task(self._ping_host_loop(host))
            for host in self.hosts
            if host.enabled
        ]
        if not tasks:
            return
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for outcome in results:
            if isinstance(outcome, BaseException) and not isinstance(
                outcome, asyncio.CancelledError
            ):
                print(f"Ping task failed: {outcome}", file=sys.stderr)

    async def _ping_host_loop(self, host: Host) -> None:
        host_id = generate_host_id(host.address)
        interval = host.interval if host.interval is not None else self.ping_config.interval
        timeout = self.ping_config.timeout

        try:
            ip = await resolve_hostname(host.address)
        except PingError as exc:
            print(f"Failed to resolve {host.address}: {exc}", file=sys.stderr)
            return

        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        sequence = 0
        while True:
            delay = next_tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            next_tick += interval

            started = time.monotonic()
            try:
                rtt = await ping_once(ip, 0, sequence, timeout)
                result = PingResult.success(rtt, sequence, started)
            except TimeoutError:
                result = PingResult.timeout(sequence, started)
            except PingError as exc:
                result = PingResult.failure(str(exc), sequence, started)

            stats = self._stats.get(host_id)
            if stats is not None:
                stats.add_result(result)

            self.events.put_nowait(PingEvent(host_id, host.name, result))
            sequence = (sequence + 1) % _SEQUENCE_MODULUS

    def get_stats(self) -> dict[str, PingStats]:
        """Return a snapshot of the per-host statistics."""
        return copy.deepcopy(self._stats)

    def get_host_info(self) -> list[tuple[str, str]]:
        """Return (host id, display name) for each enabled host, in order."""
        return [
            (generate_host_id(host.address), host.name) for host in self.hosts if host.enabled
        ]