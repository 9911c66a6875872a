"""Grouchy Spouse: a console chat client that talks back out loud."""

__version__ = "0.1.0"
