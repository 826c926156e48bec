"""Command-line interface for skills-lock."""
