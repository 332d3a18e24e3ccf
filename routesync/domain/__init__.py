"""Domain layer: route tree variants, value objects, protocols and errors."""
