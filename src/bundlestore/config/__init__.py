"""Configuration layer — settings sources, discovery, and logging."""
