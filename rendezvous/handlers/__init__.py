"""Connection, session and rate-limit handlers for the relay."""
