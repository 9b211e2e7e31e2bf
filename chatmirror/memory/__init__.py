"""In-memory state kept for the lifetime of one bot session."""
