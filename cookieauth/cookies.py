"""Provides functions for decoding raw session cookie values."""

import re
import logging
from typing import Optional
from urllib.parse import unquote

from .exceptions import NoCookie

logger = logging.getLogger(__name__)

MALFORMED_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def _percent_decode(raw: str) -> Optional[str]:
    if MALFORMED_ESCAPE.search(raw):
        return None
    try:
        return unquote(raw, errors='strict')
    except UnicodeDecodeError:
        return None


def decode(raw: Optional[str]) -> str:
    """
    Decode a raw cookie value into its canonical form.

    Percent-escapes are decoded, surrounding whitespace is trimmed, and a
    value that begins with a double quote loses its first and last
    characters. Only the leading quote is checked.

    Parameters
    ----------
    raw : str
        The cookie value as received from the client.

    Returns
    -------
    str
        The decoded value. Malformed percent-encoding yields an empty string,
        which will not match any cookie value prefix.

    Raises
    ------
    :class:`NoCookie`
        Raised if ``raw`` is absent or empty.

    """
    if not raw:
        raise NoCookie('No session cookie')

    value = _percent_decode(raw)
    if value is None:
        logger.debug('Cookie value has malformed percent-encoding')
        return ''

    value = value.strip()
    if value[:1] == '"':    # Quoted value.
        value = value[1:-1]
    return value


def strip_prefix(decoded: str, prefix: str) -> str:
    """
    Get the signed payload that follows ``prefix`` in a decoded cookie value.

    Raises
    ------
    :class:`NoCookie`
        Raised if ``decoded`` does not begin with ``prefix``.

    """
    if decoded[:len(prefix)] != prefix:
        raise NoCookie('Cookie value is not a signed session ID')
    return decoded[len(prefix):]
