"""compliance-tracker: statutory and recurring deadline tracking for small businesses in Nepal."""

__version__ = "0.1.0"
