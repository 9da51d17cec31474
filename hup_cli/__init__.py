"""Command-line interface for hot-update."""
