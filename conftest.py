"""Shared pytest fixtures for the authenticator tests."""

import json
from unittest import mock

import pytest

from cookieauth import signature
from cookieauth.config import Settings

SECRET = 'keyboard cat'


@pytest.fixture
def settings():
    return Settings(cookie_name='connect.sid', secret=SECRET)


@pytest.fixture
def store():
    """A session store that has nothing in it."""
    _store = mock.AsyncMock()
    _store.get.return_value = None
    return _store


@pytest.fixture
def make_cookie():
    def _make_cookie(session_id, secret=SECRET, prefix='s:'):
        return prefix + signature.sign(session_id, secret)
    return _make_cookie


@pytest.fixture
def alice():
    return json.dumps({'cookie': {'path': '/'},
                       'user': {'name': 'Alice'}}).encode('utf-8')
