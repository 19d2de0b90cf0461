"""Command-line interface for DepWatch."""
