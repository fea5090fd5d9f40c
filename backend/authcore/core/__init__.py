"""Core application plumbing: configuration, logging and extensions."""
