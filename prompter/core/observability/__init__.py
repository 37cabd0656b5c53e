"""Observability — logging setup for the CLI."""
