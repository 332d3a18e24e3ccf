"""Core layer: configuration, constants, Result types and shared errors."""
