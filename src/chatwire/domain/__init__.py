"""Presence states, value types, schemas and the codec.

This layer depends only on stdlib and pydantic.
It must never import from models, services, commands, output, or config.
"""
