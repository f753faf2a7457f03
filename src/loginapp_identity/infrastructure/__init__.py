"""Identity infrastructure adapters."""
