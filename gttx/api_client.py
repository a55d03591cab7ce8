'''
**gttx.api_client**
-------------------

The authenticated request pipeline every resource method goes through:
resolve a token, attach it as the ``Authorization`` header, call the API,
classify the envelope, and retry code 4 rejections within the configured
budget.
'''
import dataclasses as dc
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Literal, Self

import httpx

from gttx import http
from gttx._classify import Failure, classify
from gttx.auth import Authenticator
from gttx.errors import AuthorizationExpired
from gttx.session import Credentials, Session, TokenCache

logger = logging.getLogger(__name__)


Methods = Literal['GET', 'POST', 'PATCH', 'PUT', 'DELETE']


@dc.dataclass(frozen=True, slots=True)
class RequestSpec:
    '''
    One logical call against the API, built per call by a resource method.
    '''
    method: Methods
    path: str
    params: Mapping[str, Any] = dc.field(default_factory=dict)
    body: Any = None
    requires_auth: bool = True


class ApiClient:
    '''
    Owns the HTTP client, the credentials and the session of one GTTX
    application. Sessions are never shared between instances.
    '''

    def __init__(
        self,
        app_id: str,
        secret_key: str,
        config: http.ClientConfig | Mapping[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not app_id or not secret_key:
            raise ValueError('app_id and secret_key are both required')

        if not isinstance(config, http.ClientConfig):
            config = http.ClientConfig.from_options(config)

        self.config: http.ClientConfig = config
        self.credentials = Credentials(app_id=app_id, secret_key=secret_key)
        self._client = http.GttxHttpClient(config, transport=transport)
        self._tokens = TokenCache(clock=clock)
        self._authenticator = Authenticator(
            self._client,
            self.credentials,
            self._tokens,
        )
        self._retry = http.unauthorized_retry(retries=config.unauthorized_retry)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def session(self) -> Session | None:
        return self._tokens.get()

    async def authorize(self) -> Session:
        '''
        Obtain a new session token regardless of the cached one.

        Returns
        -------
        Session

        Raises
        ------
        AuthorizationFailed
        '''
        return await self._authenticator.authorize()

    async def _attempt(self, spec: RequestSpec) -> Any:
        headers = {}
        token = None
        if spec.requires_auth:
            token = await self._authenticator.resolve_token()
            headers['Authorization'] = token

        kwargs: dict[str, Any] = {
            'params': {k: v for k, v in spec.params.items() if v is not None},
            'headers': headers,
        }
        if spec.body is not None:
            kwargs['json'] = spec.body

        body = await http.request_json(self._client, spec.method, spec.path, **kwargs)

        outcome = classify(body)
        if not isinstance(outcome, Failure):
            return outcome.payload

        logger.debug(f'{spec.method} {spec.path} rejected with code {outcome.code}')
        exc = outcome.to_exception()
        if (
            isinstance(exc, AuthorizationExpired)
            and token is not None
            and self.config.invalidate_on_unauthorized
        ):
            self._authenticator.reject(token)
        raise exc

    async def send(self, spec: RequestSpec) -> Any:
        '''
        Dispatch a request through the authenticated pipeline.

        Parameters
        ----------
        spec : RequestSpec

        Returns
        -------
        Any
            The decoded response body

        Raises
        ------
        AuthorizationExpired
            If every attempt was rejected with code 4
        ProviderRejected
            On any other provider error, without retrying
        AuthorizationFailed
            If a token could not be obtained
        TransportFailure
            On network errors or non-JSON responses
        '''
        return await self._retry.call_with_retries(self._attempt, spec)

    async def request(
        self,
        method: Methods,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        *,
        requires_auth: bool = True,
    ) -> Any:
        return await self.send(
            RequestSpec(
                method=method,
                path=path,
                params=params or {},
                body=body,
                requires_auth=requires_auth,
            )
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
