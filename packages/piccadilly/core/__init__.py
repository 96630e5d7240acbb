"""Piccadilly core: planning, manifest serialization and encoding."""
