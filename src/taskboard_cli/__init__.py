"""Task board CLI - a kanban board kept in a single JSON file."""

__version__ = "0.1.0"
