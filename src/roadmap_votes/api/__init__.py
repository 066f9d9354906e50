"""HTTP API for Roadmap Votes."""
