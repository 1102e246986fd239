"""Config – environment-based settings and provider credentials."""
