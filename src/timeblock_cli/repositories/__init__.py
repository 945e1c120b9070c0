"""Repository interfaces for timeblock-cli.

This package contains the abstract base class that defines the contract for
task persistence. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- timeblock_cli.adapters.sqlite (local storage)
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
