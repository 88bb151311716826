"""Core application configuration and middleware."""
