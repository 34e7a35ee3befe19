"""Request and outcome types for the session cookie authenticator."""

from typing import Mapping, NamedTuple, Optional, Union

REASON_COOKIE = 'cookie'
REASON_INVALID_COOKIE = 'Invalid cookie'
REASON_SERVER_ERROR = 'Server error when checking authorization'
LOGIN_MESSAGE = 'Please refresh page after login success~'


class Request(NamedTuple):
    """The parts of an incoming request that the authenticator reads."""

    cookies: Mapping[str, str]
    """Cookie values by name, as parsed by the transport layer."""

    path: str = '/'
    """Original request path, including the query string if any."""


class Authenticated(NamedTuple):
    """The request carries a valid session."""

    artifacts: dict
    """The session record retrieved from the store."""

    credentials: dict
    """Same record as :attr:`artifacts`, for credential consumers."""


class Unauthenticated(NamedTuple):
    """The request does not carry a valid session."""

    reason: str = REASON_COOKIE

    clear_cookie: Optional[str] = None
    """Name of a cookie that the response should remove from the client."""


class Redirect(NamedTuple):
    """The client should log in at ``target`` before retrying."""

    target: str
    message: str = LOGIN_MESSAGE
    clear_cookie: Optional[str] = None


class ServerError(NamedTuple):
    """The session could not be checked, e.g. the store is unreachable."""

    reason: str = REASON_SERVER_ERROR


Outcome = Union[Authenticated, Unauthenticated, Redirect, ServerError]
