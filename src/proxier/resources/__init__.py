"""Packaged resources (built-in configuration defaults)."""
