"""Application layer: orchestration of providers and domain services."""
