"""Service layer — the resolution engine, the provider facade, and ServiceResult operations.

Services may import from domain, backends and config.
They must never import from commands or output.
"""
