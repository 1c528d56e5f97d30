"""Repository interfaces for the task board.

This package contains the abstract base class that defines the contract for
task store operations. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskboard_cli.adapters.json_store (local JSON document)
"""

from .repository import TaskStore

__all__ = ["TaskStore"]
