"""Command-line interface for HMS administration tasks."""
