"""CLI command groups that are not tied to a single entity."""
