"""Command-line interface for letterdesk."""
