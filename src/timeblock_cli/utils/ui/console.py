"""Console utilities for timeblock-cli."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=highlight)


def disable_color() -> None:
    """Strip color from every console handed out by get_console."""
    for highlight in (True, False):
        get_console(highlight).no_color = True
