"""Application layer: route tree compiler and the sync orchestrator."""
