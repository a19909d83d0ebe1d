"""Configuration — TOML discovery, pydantic settings models, and logging setup."""
