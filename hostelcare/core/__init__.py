"""Core infrastructure: logging, exceptions, security, middleware."""
