"""Inter-service HTTP API contracts."""
