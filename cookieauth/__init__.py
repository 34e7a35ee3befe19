"""
Authenticates requests that carry a signed session cookie.

The session ID in the cookie is signed with a shared secret, in the format
used by express-session. Session records are read from a key-value store
(Redis) and must name a non-anonymous principal.
"""

from .authenticate import SessionAuthenticator
from .config import Settings, RedisSettings
from .domain import Request, Outcome, Authenticated, Unauthenticated, \
    Redirect, ServerError

__all__ = [
    'SessionAuthenticator',
    'Settings',
    'RedisSettings',
    'Request',
    'Outcome',
    'Authenticated',
    'Unauthenticated',
    'Redirect',
    'ServerError',
]
