"""Application layer – notification routing use cases."""
