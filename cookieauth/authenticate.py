"""
Authenticate requests using a signed session cookie.

The cookie carries a session ID signed with a shared secret. If the signature
checks out, the session record is retrieved from the session store and the
principal that it names is checked before the request is accepted. Every
request yields exactly one :data:`.domain.Outcome`; failures never propagate
to the caller.
"""

import logging
from typing import Optional
from urllib.parse import quote

from . import cookies, policy, signature
from .config import Settings
from .domain import Request, Outcome, Authenticated, Unauthenticated, \
    Redirect, ServerError
from .exceptions import AuthenticationFailed, InvalidSignature, \
    MalformedSession
from .services.session_store import KeyValueStore

logger = logging.getLogger(__name__)

# Characters that JavaScript's encodeURIComponent leaves alone, in addition
# to the ones that urllib never quotes.
URI_COMPONENT_SAFE = "!*'()"


class SessionAuthenticator(object):
    """
    Decides whether a request carries a valid session cookie.

    Parameters
    ----------
    settings : :class:`.Settings`
    store : :class:`.KeyValueStore`
        Shared session store client. Its lifetime is owned by the
        application, not by the authenticator.

    """

    def __init__(self, settings: Settings, store: KeyValueStore) -> None:
        self.settings = settings
        self.store = store

    async def authenticate(self, request: Request) -> Outcome:
        """
        Authenticate a request.

        Parameters
        ----------
        request : :class:`.domain.Request`

        Returns
        -------
        :class:`.Authenticated`
            If the session is valid.
        :class:`.Unauthenticated` or :class:`.ServerError`
            If no redirect target is configured and the session is not
            valid or could not be checked.
        :class:`.Redirect`
            If a redirect target is configured and the request was not
            authenticated.

        """
        outcome = await self._validate(request)
        if isinstance(outcome, Authenticated):
            return outcome
        return self._unauthenticated(request, outcome)

    def _session_id(self, raw: Optional[str]) -> str:
        decoded = cookies.decode(raw)
        return signature.verify(decoded, self.settings.cookie_value_prefix,
                                 self.settings.secret)

    async def _validate(self, request: Request) -> Outcome:
        cookie_name = self.settings.cookie_name
        try:
            session_id = self._session_id(request.cookies.get(cookie_name))
        except InvalidSignature as e:
            logger.warning('Cookie %s has an invalid signature', cookie_name)
            clear = cookie_name if self.settings.clear_invalid else None
            return Unauthenticated(e.reason, clear_cookie=clear)
        except AuthenticationFailed as e:
            logger.debug('No usable session cookie: %s', e)
            return Unauthenticated(e.reason)

        key = self.settings.session_id_prefix + session_id
        try:
            raw = await self.store.get(key)
        except Exception as e:
            logger.error('Session lookup failed: %s', e)
            return ServerError()

        try:
            record, _ = policy.evaluate(raw, self.settings.user_prop)
        except MalformedSession as e:
            logger.error('Could not load session %s: %s', key, e)
            return ServerError()
        except AuthenticationFailed as e:
            logger.debug('Session %s rejected: %s', key, e)
            return Unauthenticated(e.reason)
        return Authenticated(artifacts=record, credentials=record)

    def _unauthenticated(self, request: Request, outcome: Outcome) -> Outcome:
        redirect_to = self.settings.redirect_to
        if not redirect_to:
            return outcome

        uri = redirect_to
        next_param = self.settings.append_next
        if next_param:
            uri += '&' if '?' in uri else '?'
            path = quote(request.path, safe=URI_COMPONENT_SAFE)
            uri += f'{next_param}={path}'
        return Redirect(uri,
                        clear_cookie=getattr(outcome, 'clear_cookie', None))
