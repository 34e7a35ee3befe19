"""Policy checks applied to session records retrieved from the store."""

import json
import logging
from typing import Any, Mapping, Tuple, Union

from .exceptions import SessionMiss, MalformedSession, InvalidPrincipal

logger = logging.getLogger(__name__)

ANONYMOUS = 'Anonymous'


def parse_record(raw: Union[bytes, str, None]) -> dict:
    """
    Parse a stored session record.

    Parameters
    ----------
    raw : bytes, str or None
        Value returned by the session store; ``None`` if there is no session.

    Returns
    -------
    dict

    Raises
    ------
    :class:`SessionMiss`
        Raised if no session was found.
    :class:`MalformedSession`
        Raised if the value is not a JSON object.

    """
    if not raw:
        raise SessionMiss('No such session')
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedSession('Session record is not UTF-8') from e
    try:
        record = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise MalformedSession(f'Invalid or corrupted session: {e}') from e
    if not isinstance(record, dict):
        logger.debug('Session record is a %s', type(record).__name__)
        raise MalformedSession('Session record is not an object')
    return record


def get_principal(record: Mapping[str, Any], field: str) -> Any:
    """
    Get the principal from a session record.

    Raises
    ------
    :class:`InvalidPrincipal`
        Raised if ``field`` is missing or empty, or if it holds the anonymous
        identity.

    """
    principal = record.get(field)
    if not principal:
        raise InvalidPrincipal(f'Session has no {field}')
    if isinstance(principal, Mapping) and principal.get('name') == ANONYMOUS:
        raise InvalidPrincipal('Session belongs to an anonymous user')
    return principal


def evaluate(raw: Union[bytes, str, None], field: str) -> Tuple[dict, Any]:
    """Parse a stored session and apply policy; get the record and principal."""
    record = parse_record(raw)
    return record, get_principal(record, field)
