"""Testing – in-memory doubles for the notification ports."""
