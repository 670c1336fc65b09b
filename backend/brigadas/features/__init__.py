"""Feature modules of the Brigadas API."""
