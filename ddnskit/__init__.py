"""Helpers for dynamic DNS clients: API request signers, IP caching, networking, messages and self-update."""

__version__ = "0.1.0"