"""Cross-cutting service primitives: base class, errors, policies and ports."""
