"""Command-line interface for cms-publish."""
