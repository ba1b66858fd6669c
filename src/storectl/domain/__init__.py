"""Domain layer — catalog, cart, and hook types and rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
