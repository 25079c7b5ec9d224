"""Terminal dashboard that pings hosts and shows RTT, loss and quality with animations."""

__version__ = "0.1.3"