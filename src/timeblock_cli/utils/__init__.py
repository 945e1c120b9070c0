"""Helper utilities for timeblock-cli."""
