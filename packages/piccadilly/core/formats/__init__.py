"""Output formats consumed by external tools."""
