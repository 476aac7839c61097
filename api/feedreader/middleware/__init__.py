"""HTTP middleware for the Feed Reader API."""
