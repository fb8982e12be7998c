"""
Application version information.

Version format: MAJOR.MINOR
- MAJOR: Breaking changes to the HTTP API
- MINOR: Incremented with each merged change

Version is reported on startup and by the GET / endpoint.
"""

__version__ = "0.1"
