"""
Read-only client for the distributed session store.

Sessions are written by the application that issued the cookie, as JSON
under ``{session_id_prefix}{session_id}``. This module only reads them.

The :class:`redis.asyncio.Redis` instance is safe for concurrent use;
connections are drawn from its pool when a command is executed. A single
:class:`SessionStore` should be created per process and shared.
"""

import logging
from typing import Optional, Protocol, Union

import redis
from redis.asyncio import Redis
from redis.asyncio.cluster import RedisCluster

from ..config import RedisSettings
from ..exceptions import StoreFailure

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """The store interface consumed by :class:`.SessionAuthenticator`."""

    async def get(self, key: str) -> Optional[bytes]:
        """Get the value stored at ``key``, or ``None``."""
        ...


class SessionStore(object):
    """Manages a connection to Redis."""

    def __init__(self, host: str, port: int, db: int = 0,
                 password: Optional[str] = None, cluster: bool = False,
                 socket_timeout: Optional[float] = None) -> None:
        """Open the connection to Redis."""
        logger.debug('New Redis connection at %s, port %s', host, port)
        self.r: Union[Redis, RedisCluster]
        if cluster:
            self.r = RedisCluster(host=host, port=port, password=password,
                                  socket_timeout=socket_timeout)
        else:
            self.r = Redis(host=host, port=port, db=db, password=password,
                           socket_timeout=socket_timeout)

    async def get(self, key: str) -> Optional[bytes]:
        """
        Get a raw session record.

        Parameters
        ----------
        key : str
            Prefixed session ID.

        Returns
        -------
        bytes or None
            ``None`` if there is no such session.

        Raises
        ------
        :class:`.StoreFailure`
            Raised if the store could not be reached or the command failed.

        """
        try:
            data: Optional[bytes] = await self.r.get(key)
        except redis.exceptions.ConnectionError as e:
            raise StoreFailure(f'Connection failed: {e}') from e
        except redis.exceptions.RedisError as e:
            raise StoreFailure(f'Failed to get: {e}') from e
        return data

    async def close(self) -> None:
        """Release pooled connections."""
        await self.r.aclose()


def from_settings(settings: RedisSettings) -> SessionStore:
    """Get a new session store client for ``settings``."""
    return SessionStore(settings.host, settings.port, db=settings.db,
                        password=settings.password,
                        cluster=settings.cluster_enabled,
                        socket_timeout=settings.socket_timeout)
