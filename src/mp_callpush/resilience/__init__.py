"""Resilience – deadline propagation for awaited collaborator calls."""
