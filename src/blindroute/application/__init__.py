"""Application layer - use cases, watchers and the navigation session."""
