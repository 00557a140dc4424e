"""Service layer — realm catalog, TLS resolution, and bootstrap checks."""
