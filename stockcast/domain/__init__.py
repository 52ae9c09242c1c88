"""Domain layer: entities, provider interface and pure services."""
