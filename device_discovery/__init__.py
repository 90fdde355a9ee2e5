"""UDP broadcast discovery client for network devices."""

__version__ = "0.1.0"
