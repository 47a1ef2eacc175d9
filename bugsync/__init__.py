"""
BugSync+ backend.

Connects Cliq slash-commands and a browser UI to GitHub Issues using
per-user OAuth tokens.
"""

__version__ = "1.0.0"
