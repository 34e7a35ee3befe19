"""Service integrations used by the authenticator."""
