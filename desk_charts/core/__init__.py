"""Core models, configuration and logging."""
