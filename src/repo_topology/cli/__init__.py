"""Command-line interface for repo-topology."""
