"""Student registration API backed by an in-memory record store."""
