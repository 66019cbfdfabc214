"""Wiki document authority & sharing service."""
