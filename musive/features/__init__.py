"""Feature modules shared across pipeline stages."""
