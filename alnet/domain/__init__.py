"""Domain layer: entities, status machines and errors."""
