"""SQLAlchemy-backed store adapters."""
