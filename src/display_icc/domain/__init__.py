"""Domain layer — value types, the error taxonomy, and the ICC header codec.

This layer depends only on stdlib and pydantic.
It must never import from services, backends, commands, or config.
"""
