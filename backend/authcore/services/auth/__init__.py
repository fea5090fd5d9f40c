"""Authentication domain services."""
