# pingpong

A full-screen terminal dashboard that pings a set of hosts with ICMP echo
requests and shows, for each one, the average round-trip time, packet loss,
number of pings and a connection-quality mark. Next to it runs a text
animation whose speed and colour follow the average RTT, and a panel of flavour
text that goes with the animation.

## Installing

```
pip install .
```

Python 3.11 or later is needed. Sending ICMP echo requests needs either a
system that allows unprivileged ICMP datagram sockets or the privileges to open
a raw socket; the package tries the datagram kind first.

## Running

```
pingpong
```

Options:

- `-c, --config PATH`: configuration file to read (default `pingpong.toml`).
  If the file cannot be read or parsed, the built-in defaults are used
  (8.8.8.8, 1.1.1.1 and google.com, pinged every second).
- `-i, --interval SECONDS`: global ping interval (default `1.0`). A value other
  than `1.0` replaces the interval from the configuration file.
- `--host ADDRESS`: extra host to ping; may be given more than once. A host
  made only of digits and dots is shown as `IP <address>`, any other as the
  address itself.
- `-a, --animation NAME`: one of `plasma`, `globe`, `bounce`, `matrix`, `dna`,
  `waveform`. Without it, one is picked at random.

Example:

```
pingpong --host 192.0.2.10 --host example.com -a matrix -i 0.5
```

Every enabled host is resolved before the display opens; if one cannot be
resolved, the command prints an error and exits with status 1.

Keys while running: `q` quits, `h` or `F1` shows or hides the help screen.
`space` toggles a paused flag, but pinging carries on regardless.

When the average RTT is zero or not a number, the animation panel is titled
"CONNECTION FAILED!" and a flashing X is drawn over the animation.

## Configuration

The configuration file is TOML. Every field shown below is required except a
host's `enabled` (default `true`) and `interval`, and `ui.show_details`
(default `true`):

```toml
[ping]
interval = 1.0
timeout = 3.0
history_size = 300
packet_size = 32

[[hosts]]
name = "Google DNS"
address = "8.8.8.8"
enabled = true

[[hosts]]
name = "Cloudflare DNS"
address = "1.1.1.1"
interval = 2.0

[ui]
refresh_rate = 100
theme = "auto"
show_details = true
graph_height = 10
```

A host's `interval` overrides the global one for that host. Hosts with
`enabled = false` are skipped. `refresh_rate` is the redraw period in
milliseconds, and `history_size` is how many recent results are kept per host
for the RTT figures.

## Using it as a library

```python
from pingpong.config import Config
from pingpong.stats import PingResult, PingStats

config = Config.default()
config.add_host("192.0.2.1")
config.save("pingpong.toml")

stats = PingStats(300)
stats.add_result(PingResult.success(0.020, 0, 0.0))
stats.add_result(PingResult.timeout(1, 1.0))
print(stats.packet_loss_percent(), stats.connection_quality().symbol())
print(stats.rtt_stats().avg)
```

Modules:

- `pingpong.config`: `Config`, `PingConfig`, `Host`, `UiConfig`; `Config.load`
  and `Config.save` raise `ConfigError`.
- `pingpong.stats`: `PingResult`, `PingStats`, `RttStats`, `ConnectionQuality`.
  Times are in seconds; `rtt_history_for_graph` returns milliseconds.
- `pingpong.ping`: `PingEngine`, `PingEvent`, `ping_once`, `resolve_hostname`,
  `generate_host_id`, `build_echo_request`, `icmp_checksum`; failures raise
  `PingError`, and `ping_once` raises `TimeoutError` when no reply arrives.
- `pingpong.animations_motion`, `animations_plasma`, `animations_globe`,
  `animations_signal`, `animations_overlay`: functions that return an
  animation frame as a string for a given time and panel size.
- `pingpong.tui`: `TuiApp` (usable in a `with` block), `AnimationType` and
  the text builders for the panels.
- `pingpong.app`: `App`, which feeds ping events into statistics and redraws.
- `pingpong.cli`: `main`, the `pingpong` command.

## What it does not do

- `ping.packet_size`, `ui.theme`, `ui.show_details` and `ui.graph_height` are
  read and written with the configuration but do not change anything: echo
  requests carry an empty payload and the display has a single fixed layout.
- No RTT graph is drawn; `PingStats.rtt_history_for_graph` only provides the
  sampled values.
- Results are not stored anywhere; statistics live only while the program runs.

## Running the tests

```
pip install ".[test]"
pytest
```