"""FastAPI application (entry point and exception handlers)."""
