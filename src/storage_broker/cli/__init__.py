"""Command-line interface for the storage broker."""
