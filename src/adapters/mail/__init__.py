"""Email dispatcher adapters."""
