"""
Application package initializer.

The project is organised into ``core`` (configuration, logging,
database access), ``schemas`` (API payloads), ``services`` (lookup
logic) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
