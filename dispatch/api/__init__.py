"""HTTP API modules."""
