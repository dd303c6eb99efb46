"""Persistence layer for album comments and likes."""

__version__ = "0.1.0"
