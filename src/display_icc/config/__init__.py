"""Configuration — pydantic models, TOML discovery, settings, and logging setup."""
