"""Database access for the Feed Reader API."""
