"""Core infrastructure: logging, monitoring, errors, persistence and models."""
