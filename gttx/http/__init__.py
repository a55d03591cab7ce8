'''
**gttx.http**
---------

The HTTP layer of the GTTX client: the configured ``httpx.AsyncClient``
wrapper with its transport and SSL context, the client configuration, and
the code 4 retry policy.
'''
from gttx.http._client import (
    GttxTransport,
    ClientConfig,
    GttxHttpClient,
    Protocols,
    DEFAULT_HOST,
    DEFAULT_PROTOCOL,
    api_ssl_context,
    get_socket_options,
    request_json,
)
from gttx.http._retry import unauthorized_retry

__all__ = [
    'GttxTransport',
    'ClientConfig',
    'GttxHttpClient',
    'Protocols',
    'DEFAULT_HOST',
    'DEFAULT_PROTOCOL',
    'api_ssl_context',
    'get_socket_options',
    'request_json',
    'unauthorized_retry',
]
