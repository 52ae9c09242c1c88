"""Infrastructure layer: external data sources."""
