"""Command-line tools for eventdraft."""
