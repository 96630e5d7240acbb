"""Sequencing for Piccadilly animations."""
