"""Command-line task list with local user accounts."""

__version__ = "0.1.0"
