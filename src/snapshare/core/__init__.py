"""Core configuration, logging, security and error types."""
