"""
Top-level package for the Syllabus Hierarchy API.

The HTTP application lives under ``app``; ``client`` provides a small
``requests``-based client for talking to a running server.
"""

__all__ = []
