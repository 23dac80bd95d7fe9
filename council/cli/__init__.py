"""Command-line interface for council."""
