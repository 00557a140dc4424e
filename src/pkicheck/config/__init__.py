"""Configuration — tool settings, node config discovery, and logging."""
