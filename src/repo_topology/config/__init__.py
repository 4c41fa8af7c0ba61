"""Configuration for repo-topology."""
