"""Minimal async client for the Hacker News Firebase API."""

__version__ = "0.1.0"
