"""Application-layer adapters."""
