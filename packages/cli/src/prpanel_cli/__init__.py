"""Command-line interface for prpanel."""
