"""
Use :class:`.SessionAuthenticator` to protect FastAPI routes.

.. code-block:: python

   app = FastAPI()
   authenticator = SessionAuthenticator(settings, store)
   init_app(app, authenticator)
   require_session = SessionCookieAuth(authenticator)

   @app.get('/dashboard')
   async def dashboard(session: dict = Depends(require_session)) -> dict:
       return session['user']

"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..authenticate import SessionAuthenticator
from ..domain import Request as RequestView, Outcome, Authenticated, \
    Unauthenticated, Redirect, ServerError

log = logging.getLogger(__name__)


class NotAuthenticated(Exception):
    """Carries a non-authenticated outcome out of a route dependency."""

    def __init__(self, outcome: Outcome) -> None:
        super().__init__(outcome)
        self.outcome = outcome


def request_view(request: Request) -> RequestView:
    """Get the parts of a Starlette request that the authenticator reads."""
    path = request.url.path
    if request.url.query:
        path = f'{path}?{request.url.query}'
    return RequestView(cookies=request.cookies, path=path)


def outcome_response(outcome: Outcome) -> Response:
    """Generate a response for an outcome other than :class:`.Authenticated`."""
    response: Response
    if isinstance(outcome, Redirect):
        response = PlainTextResponse(outcome.message,
                                     status_code=status.HTTP_200_OK)
    elif isinstance(outcome, Unauthenticated):
        response = JSONResponse({'reason': outcome.reason},
                                status_code=status.HTTP_401_UNAUTHORIZED,
                                headers={'WWW-Authenticate': 'Cookie'})
    elif isinstance(outcome, ServerError):
        response = JSONResponse(
            {'reason': outcome.reason},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    else:
        raise TypeError(f'No response for {type(outcome).__name__}')

    clear_cookie = getattr(outcome, 'clear_cookie', None)
    if clear_cookie:
        response.delete_cookie(clear_cookie)
    return response


async def handle_not_authenticated(request: Request,
                                   exc: NotAuthenticated) -> Response:
    """Exception handler for :class:`NotAuthenticated`."""
    return outcome_response(exc.outcome)


class SessionCookieAuth:
    """
    Route dependency that requires a valid session cookie.

    Returns the session record of an authenticated request. Otherwise raises
    :class:`NotAuthenticated`, which :func:`init_app` turns into a response.
    """

    def __init__(self, authenticator: SessionAuthenticator) -> None:
        self.authenticator = authenticator

    async def __call__(self, request: Request) -> dict:
        outcome = await self.authenticator.authenticate(request_view(request))
        if isinstance(outcome, Authenticated):
            log.debug('Session cookie accepted')
            return outcome.credentials
        raise NotAuthenticated(outcome)


def init_app(app: FastAPI, authenticator: SessionAuthenticator) -> None:
    """Register the authenticator and its exception handler on ``app``."""
    app.state.authenticator = authenticator
    app.add_exception_handler(NotAuthenticated, handle_not_authenticated)
