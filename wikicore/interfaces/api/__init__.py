"""API interface adapters."""
