"""
Signing and verification of session IDs carried in cookies.

A signed value has the form ``{value}.{mac}``, where ``mac`` is the
base64-encoded HMAC-SHA256 of ``value`` keyed with the shared secret, with
trailing ``=`` padding removed. This is the scheme used by express-session
(via ``cookie-signature``), so cookies issued by those applications can be
verified here.
"""

import hmac
import hashlib
import logging
from base64 import b64encode
from typing import Optional

from . import cookies
from .exceptions import InvalidSignature

logger = logging.getLogger(__name__)


def _mac(value: str, secret: str) -> str:
    digest = hmac.new(secret.encode('utf-8'), value.encode('utf-8'),
                      hashlib.sha256).digest()
    return b64encode(digest).decode('ascii').rstrip('=')


def sign(value: str, secret: str) -> str:
    """Sign ``value`` with ``secret``."""
    return f'{value}.{_mac(value, secret)}'


def unsign(signed: str, secret: str) -> Optional[str]:
    """
    Recover the value from a signed string.

    Parameters
    ----------
    signed : str
        A value produced by :func:`sign`.
    secret : str
        The secret used to sign the value.

    Returns
    -------
    str or None
        The original value, or ``None`` if the signature does not match.

    """
    value, sep, _ = signed.rpartition('.')
    if not sep:
        return None
    try:
        expected = sign(value, secret).encode('utf-8')
        actual = signed.encode('utf-8')
    except UnicodeEncodeError:
        logger.debug('Signed value is not valid UTF-8')
        return None
    if not hmac.compare_digest(expected, actual):
        logger.debug('Signature does not match')
        return None
    return value


def verify(decoded: str, prefix: str, secret: str) -> str:
    """
    Verify a decoded cookie value and get the session ID that it carries.

    Parameters
    ----------
    decoded : str
        Cookie value, as returned by :func:`.cookies.decode`.
    prefix : str
        Literal prefix that marks a signed value, e.g. ``s:``.
    secret : str
        Secret used to sign session IDs.

    Returns
    -------
    str
        The session ID.

    Raises
    ------
    :class:`.NoCookie`
        Raised if the value does not begin with ``prefix``.
    :class:`.InvalidSignature`
        Raised if the signature is missing or does not match.

    """
    payload = cookies.strip_prefix(decoded, prefix)
    session_id = unsign(payload, secret)
    if session_id is None:
        raise InvalidSignature('Invalid session cookie; forged?')
    return session_id
