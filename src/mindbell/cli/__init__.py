"""Command-line interface for mindbell."""
