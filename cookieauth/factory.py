"""Provides an app factory for the forward-auth service."""

import os
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI

from .authenticate import SessionAuthenticator
from .config import Settings
from .fastapi.auth import SessionCookieAuth, init_app
from .services import session_store
from .services.session_store import KeyValueStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None,
               store: Optional[KeyValueStore] = None) -> FastAPI:
    """
    Initialize an instance of the forward-auth service.

    Parameters
    ----------
    settings : :class:`.Settings`
        Loaded from the environment if not provided.
    store : :class:`.KeyValueStore`
        A Redis client is created from ``settings.redis`` if not provided,
        and closed when the application shuts down.

    """
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper())
    if settings is None:
        settings = Settings.from_env()

    owned_store: Optional[session_store.SessionStore] = None
    if store is None:
        store = owned_store = session_store.from_settings(settings.redis)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info('Authenticating cookie %s', settings.cookie_name)
        yield
        if owned_store is not None:
            await owned_store.close()

    app = FastAPI(title='cookieauth', lifespan=lifespan)
    authenticator = SessionAuthenticator(settings, store)
    init_app(app, authenticator)
    require_session = SessionCookieAuth(authenticator)

    @app.get('/auth')
    async def authenticate(session: dict = Depends(require_session)) -> dict:
        """Authenticate the request; respond with its session record."""
        return session

    @app.get('/health')
    async def health() -> dict:
        return {'status': 'ok'}

    return app
