"""Domain layer: syntax forest, interface model, configuration, errors."""
