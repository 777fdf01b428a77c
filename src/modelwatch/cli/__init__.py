"""Command-line interface for modelwatch."""
