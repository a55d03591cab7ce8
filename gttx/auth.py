'''
**gttx.auth**
-------------

Exchanges the application id and secret key for a session token.

Token resolution is single-flight: when several calls find the cache stale
at the same time they all await one authorization request instead of each
issuing their own and overwriting each other's session.
'''
import asyncio
import logging
from typing import Any

import httpx

from gttx import http
from gttx._classify import Failure, classify
from gttx.errors import AuthorizationFailed
from gttx.session import Credentials, Session, TokenCache

logger = logging.getLogger(__name__)

AUTHORIZE_PATH = '/xddos/public/authorize'
TOKEN_FIELD = 'Authorization'


def extract_token(body: Any) -> str | None:
    '''
    Find the token in an authorization response, at the top level of the body
    or nested under ``result``.

    Parameters
    ----------
    body : Any

    Returns
    -------
    str | None
    '''
    if not isinstance(body, dict):
        return None

    token = body.get(TOKEN_FIELD)
    if token is None and isinstance(result := body.get('result'), dict):
        token = result.get(TOKEN_FIELD)

    if token is None or token == '':
        return None
    return str(token)


class Authenticator:
    __slots__ = (
        '_client',
        '_credentials',
        '_cache',
        '_inflight',
    )

    def __init__(
        self,
        client: httpx.AsyncClient,
        credentials: Credentials,
        cache: TokenCache,
    ) -> None:
        self._client = client
        self._credentials = credentials
        self._cache = cache
        self._inflight: asyncio.Task[Session] | None = None

    @property
    def cache(self) -> TokenCache:
        return self._cache

    async def _request_session(self) -> Session:
        body = await http.request_json(
            self._client,
            'GET',
            AUTHORIZE_PATH,
            params=self._credentials.as_query(),
            log_body=False,
        )
        outcome = classify(body)
        if isinstance(outcome, Failure):
            logger.warning(f'Authorization rejected with code {outcome.code}')
            raise AuthorizationFailed(outcome.message, outcome.code)

        token = extract_token(outcome.payload)
        if token is None:
            raise AuthorizationFailed(
                f'Authorization response carried no {TOKEN_FIELD!r} field'
            )

        logger.info(f'Authorized application {self._credentials.app_id}')
        return self._cache.set(token)

    def _clear_inflight(self, task: asyncio.Task[Session]) -> None:
        if self._inflight is task:
            self._inflight = None

        # read the outcome so a failure nobody awaited is not reported as unretrieved
        if not task.cancelled() and (exc := task.exception()) is not None:
            logger.debug(f"Shared authorization failed: {exc!r}")

    async def authorize(self) -> Session:
        '''
        Request a new session token and cache it. Joins an authorization that
        is already in flight rather than starting a second one.

        Returns
        -------
        Session

        Raises
        ------
        AuthorizationFailed
            If the provider rejected the credentials
        TransportFailure
            If the authorization request never produced a JSON body
        '''
        if self._inflight is None or self._inflight.done():
            task = asyncio.ensure_future(self._request_session())
            task.add_done_callback(self._clear_inflight)
            self._inflight = task

        # shielded so a cancelled waiter does not cancel the shared request
        return await asyncio.shield(self._inflight)

    async def resolve_token(self) -> str:
        '''
        The cached token while it is valid, otherwise a freshly authorized one.

        Returns
        -------
        str
        '''
        if session := self._cache.current():
            return session.token

        session = await self.authorize()
        return session.token

    def reject(self, token: str) -> None:
        '''
        Forget ``token`` after the provider refused it, unless a newer token
        has already replaced it.
        '''
        self._cache.invalidate(token)
