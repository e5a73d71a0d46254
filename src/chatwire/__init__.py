"""Presence-aware JSON codec for chat-platform payloads."""

__version__ = "0.3.0"
