import ssl
import socket
import contextlib
import dataclasses as dc
import logging
from collections.abc import Mapping
from typing import Any, Literal, Self

import httpx

from gttx._version import __version__
from gttx.errors import TransportFailure


logger = logging.getLogger(__name__)


Protocols = Literal['http', 'https']

DEFAULT_HOST = 'cloud.gttx.com'
DEFAULT_PROTOCOL: Protocols = 'https'


def _base_limits() -> httpx.Limits:
    return httpx.Limits(
        max_connections=100,
        max_keepalive_connections=20,
        keepalive_expiry=15,
    )


def _base_timeouts() -> httpx.Timeout:
    return httpx.Timeout(
        connect=5.0,
        read=10.0,
        write=10.0,
        pool=5.0,
    )


def _default_headers(user_agent: str) -> dict[str, str]:
    return {
        'Accept': 'application/json',
        'User-Agent': user_agent,
    }


def get_socket_options() -> list[tuple]:
    '''
    cross platform socket options for TCP connections

    Returns
    -------
    list[SockOpt]
    '''
    opts = []

    if hasattr(socket, "TCP_NODELAY"):
        opts.append((socket.IPPROTO_TCP, socket.TCP_NODELAY, 1))

    if hasattr(socket, "SO_KEEPALIVE"):
        opts.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1))

    if hasattr(socket, "TCP_KEEPIDLE"):
        opts.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, 60))

    if hasattr(socket, "TCP_KEEPINTVL"):
        opts.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, 10))

    if hasattr(socket, "TCP_KEEPCNT"):
        opts.append((socket.IPPROTO_TCP, socket.TCP_KEEPCNT, 5))

    return opts


def api_ssl_context() -> ssl.SSLContext:
    '''
    creates the SSL context used against the provider API, TLS 1.2 as a floor,
    hostname verification on, ALPN offering http/2 before http/1.1.

    Returns
    -------
    ssl.SSLContext
    '''
    ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)

    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED

    with contextlib.suppress(NotImplementedError):
        ctx.set_alpn_protocols(["h2", "http/1.1"])

    ctx.options |= ssl.OP_NO_COMPRESSION
    return ctx


class GttxTransport(httpx.AsyncBaseTransport):
    '''
    httpx transport with the API's SSL context and TCP keepalive socket
    options. ``retries`` only covers failed connection attempts, it never
    replays a request the provider has answered.
    '''
    def __init__(
        self,
        *,
        http2: bool = True,
        trust_env: bool = False,
        retries: int = 1
    ) -> None:
        self._inner: httpx.AsyncHTTPTransport = httpx.AsyncHTTPTransport(
            http2=http2,
            socket_options=get_socket_options(),
            verify=api_ssl_context(),
            trust_env=trust_env,
            retries=retries
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._inner.handle_async_request(request)

    async def aclose(self) -> None:
        await self._inner.aclose()


async def log_request(request: httpx.Request) -> None:
    url = request.url
    logger.debug(f'Sending request: {request.method} {url.scheme}://{url.host}{url.path}')


async def log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(
        f'Received {response.status_code} for {request.method} {request.url.path}'
    )


@dc.dataclass(slots=True)
class ClientConfig:
    '''
    Configuration options for the GTTX client.

    Attributes
    ----------
    - host: API host name, ``cloud.gttx.com`` unless pointed elsewhere

    - protocol: ``http`` or ``https``

    - unauthorized_retry: how many times a call rejected with code 4 is
    attempted again, 0 disables retrying

    - invalidate_on_unauthorized: drop the rejected token before retrying so
    the retry always runs with a freshly authorized one. When False the retry
    re-resolves through the validity window only and may reuse the token.

    - timeout, limits, http2, trust_env, retries: passed to httpx, ``retries``
    being connection retries inside the transport
    '''
    host: str = DEFAULT_HOST
    protocol: Protocols = DEFAULT_PROTOCOL
    unauthorized_retry: int = 0
    invalidate_on_unauthorized: bool = False
    timeout: httpx.Timeout = dc.field(default_factory=_base_timeouts)
    limits: httpx.Limits = dc.field(default_factory=_base_limits)
    http2: bool = True
    trust_env: bool = False
    retries: int = 3
    user_agent: str = f'gttx-python/{__version__}'

    def __post_init__(self) -> None:
        if self.protocol not in ('http', 'https'):
            raise ValueError(f"Unsupported protocol: {self.protocol!r}")

        if not self.host:
            raise ValueError('host must not be empty')

        if not isinstance(self.unauthorized_retry, int) or isinstance(self.unauthorized_retry, bool):
            raise TypeError(
                f"unauthorized_retry must be an int, got {self.unauthorized_retry!r}"
            )

        if self.unauthorized_retry < 0:
            raise ValueError(
                f'unauthorized_retry must be >= 0, got {self.unauthorized_retry}'
            )

    @property
    def base_url(self) -> str:
        return f'{self.protocol}://{self.host}'

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> Self:
        '''
        Build a config from an options mapping, accepting the provider's
        camelCase option names (``unauthorizedRetry``) next to the field names.

        Parameters
        ----------
        options : Mapping[str, Any] | None, optional

        Returns
        -------
        ClientConfig

        Raises
        ------
        TypeError
            If an option is not recognized
        '''
        aliases = {
            'unauthorizedRetry': 'unauthorized_retry',
            'invalidateOnUnauthorized': 'invalidate_on_unauthorized',
            'trustEnv': 'trust_env',
            'userAgent': 'user_agent',
        }
        known = {f.name for f in dc.fields(cls)}
        kwargs = {}
        for key, value in (options or {}).items():
            name = aliases.get(key, key)
            if name not in known:
                raise TypeError(f'Unknown client option: {key!r}')
            if value is not None:
                kwargs[name] = value

        return cls(**kwargs)


class GttxHttpClient(httpx.AsyncClient):
    '''
    Thin wrapper around httpx.AsyncClient bound to the configured
    API base address with request/response debug hooks.
    '''

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()

        if transport is None:
            transport = GttxTransport(
                http2=self._config.http2,
                trust_env=self._config.trust_env,
                retries=self._config.retries,
            )

        all_headers = _default_headers(self._config.user_agent)
        if headers:
            all_headers.update(headers)

        super().__init__(
            base_url=self._config.base_url,
            transport=transport,
            limits=self._config.limits,
            timeout=self._config.timeout,
            headers=all_headers,
        )

        self.event_hooks['request'] = [log_request]
        self.event_hooks['response'] = [log_response]


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    log_body: bool = True,
    **kwargs: Any,
) -> Any:
    '''
    Perform a request and decode the JSON body, mapping every transport level
    problem onto ``TransportFailure``.

    Parameters
    ----------
    client : httpx.AsyncClient
    method : str
    url : str
        Path relative to the client's base address
    log_body : bool, optional
        Log the decoded body at debug level, off for bodies carrying secrets
    **kwargs
        Passed to ``httpx.AsyncClient.request``

    Returns
    -------
    Any
        The decoded body

    Raises
    ------
    TransportFailure
        On network errors, non-2xx statuses and bodies that are not JSON
    '''
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransportFailure(
            f'{method} {url} answered with HTTP {exc.response.status_code}',
            exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise TransportFailure(f'{method} {url} failed: {exc!r}') from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise TransportFailure(
            f'{method} {url} returned a body that is not JSON',
            response.status_code,
        ) from exc

    if log_body:
        logger.debug(f'{method} {url} responded with data: {data!r}')
    return data
