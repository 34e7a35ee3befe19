"""Configuration for the session cookie authenticator."""

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, \
    field_validator

from .exceptions import ConfigurationError

TRUTHY = ('1', 'true', 'yes', 'on')
FALSY = ('', '0', 'false', 'no', 'off')


class RedisSettings(BaseModel):
    """Connection parameters for the Redis session store."""

    model_config = ConfigDict(frozen=True)

    host: str = 'localhost'
    port: int = Field(default=6379, ge=1, le=65535)
    password: Optional[str] = None
    db: int = 0
    cluster_enabled: bool = False
    socket_timeout: Optional[float] = None
    """Seconds; a lookup that exceeds this is reported as a store failure."""


class Settings(BaseModel):
    """Options for :class:`.SessionAuthenticator`."""

    model_config = ConfigDict(frozen=True)

    cookie_name: str = Field(min_length=1)
    """Name of the cookie that carries the signed session ID."""

    secret: str = Field(min_length=1)
    """Secret used to sign session IDs."""

    cookie_value_prefix: str = 's:'
    session_id_prefix: str = 'sess:'
    user_prop: str = 'user'
    """Field of the session record that holds the principal."""

    clear_invalid: bool = False
    """Remove cookies whose signature does not match."""

    redirect_to: Optional[str] = None
    """Login URI for unauthenticated requests; ``None`` to disable."""

    append_next: Optional[str] = None
    """Query parameter that carries the original path on ``redirect_to``."""

    redis: RedisSettings = Field(default_factory=RedisSettings)

    @field_validator('redirect_to', mode='before')
    @classmethod
    def _disable_redirect(cls, value: Any) -> Any:
        if value is False or value == '':
            return None
        return value

    @field_validator('append_next', mode='before')
    @classmethod
    def _resolve_next_param(cls, value: Any) -> Any:
        if value is True:
            return 'next'
        if value is False or value == '':
            return None
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) \
            -> 'Settings':
        """
        Load settings from environment variables.

        Raises
        ------
        :class:`.ConfigurationError`
            Raised if a required variable is missing or a value is invalid.

        """
        env = os.environ if environ is None else environ
        try:
            cookie_name = env['AUTH_COOKIE_NAME']
            secret = env['AUTH_SECRET']
        except KeyError as e:
            raise ConfigurationError(f'Missing required parameter {e}') from e

        options: dict = {
            'cookie_name': cookie_name,
            'secret': secret,
            'clear_invalid': _flag(env.get('AUTH_CLEAR_INVALID', '0')),
            'redirect_to': env.get('AUTH_REDIRECT_TO') or None,
            'append_next': _next_param(env.get('AUTH_APPEND_NEXT', '')),
            'redis': {
                'host': env.get('REDIS_HOST', 'localhost'),
                'port': env.get('REDIS_PORT', '6379'),
                'password': env.get('REDIS_PASSWORD') or None,
                'db': env.get('REDIS_DATABASE', '0'),
                'cluster_enabled': _flag(env.get('REDIS_CLUSTER', '0')),
                'socket_timeout': env.get('REDIS_TIMEOUT') or None,
            }
        }
        for key, var in [('cookie_value_prefix', 'AUTH_COOKIE_VALUE_PREFIX'),
                         ('session_id_prefix', 'AUTH_SESSION_ID_PREFIX'),
                         ('user_prop', 'AUTH_USER_PROP')]:
            if var in env:
                options[key] = env[var]
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f'Invalid configuration: {e}') from e


def _flag(value: str) -> bool:
    value = value.strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    raise ConfigurationError(f'Not a boolean: {value}')


def _next_param(value: str) -> Any:
    normalized = value.strip().lower()
    if normalized in TRUTHY:
        return True
    if normalized in FALSY:
        return None
    return value.strip()
