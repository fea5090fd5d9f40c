"""JWT signing adapters."""
