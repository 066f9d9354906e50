"""Roadmap Votes: anonymous feature voting API."""

__version__ = "0.1.0"
