"""HTTP layer for trackl."""
