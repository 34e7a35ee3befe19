"""FastAPI integration for the session cookie authenticator."""
