"""Interface adapters (HTTP)."""
