"""Core data contracts and error types."""
