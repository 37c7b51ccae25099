"""Core dashboard logic: import parsing, enrichment merge, view derivation and state."""
