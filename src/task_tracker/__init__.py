"""Command-line task tracker backed by a local JSON file."""
