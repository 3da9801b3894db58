"""AI Readiness HTTP API."""
