"""Single source of truth for the application version."""

__version__ = "0.1.0"
