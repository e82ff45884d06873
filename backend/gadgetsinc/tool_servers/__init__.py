"""Standalone HTTP tool servers (product catalog, shipping)."""
