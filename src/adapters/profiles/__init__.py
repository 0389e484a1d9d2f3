"""Profile store adapters."""
