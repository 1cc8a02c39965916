"""Feature modules for SubSentinel."""
