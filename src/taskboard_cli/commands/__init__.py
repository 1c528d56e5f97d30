"""Typer command groups for the task board CLI."""
