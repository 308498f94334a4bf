"""Core configuration, security and encryption utilities."""
