"""Adapters – concrete implementations of the notification ports."""
