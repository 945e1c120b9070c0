"""timeblock-cli - keep a day of time blocks free of overlaps."""

__version__ = "0.1.0"
