"""Authentication backend for the timesheet application."""

__version__ = "0.1.0"
