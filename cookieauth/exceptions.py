"""Exceptions raised while authenticating a session cookie."""


class AuthenticationFailed(RuntimeError):
    """The request could not be authenticated."""

    reason = 'cookie'


class NoCookie(AuthenticationFailed):
    """No session cookie is present, or its value is not recognizable."""


class InvalidSignature(AuthenticationFailed):
    """The signature on the session cookie does not match; forged?"""

    reason = 'Invalid cookie'


class SessionMiss(AuthenticationFailed):
    """No session is stored under the session ID carried by the cookie."""


class InvalidPrincipal(AuthenticationFailed):
    """The session does not carry a usable (non-anonymous) principal."""


class StoreFailure(RuntimeError):
    """Failed to retrieve a session from the session store."""


class MalformedSession(StoreFailure):
    """The stored session could not be parsed as a JSON object."""


class ConfigurationError(RuntimeError):
    """Raised when a required parameter is missing or invalid."""
