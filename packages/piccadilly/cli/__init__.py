"""Command-line interface for Piccadilly."""
