"""Adapters module - TaskStore implementations for storage backends.

This package contains concrete implementations (adapters) of the TaskStore port:
- json_store: Local single-file JSON board
"""

from .json_store import JsonTaskStore

__all__ = ["JsonTaskStore"]
