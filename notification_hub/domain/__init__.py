"""Domain layer: entities, categories and error taxonomy."""
