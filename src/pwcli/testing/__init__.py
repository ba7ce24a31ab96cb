"""Testing – in-memory doubles for the ports in this package."""
