'''
**gttx**
--------

Async client for the GTTX cloud DDoS mitigation API.
'''
from gttx._version import __version__
from gttx._classify import ClassifiedResult, Failure, Success, classify
from gttx.api_client import ApiClient, RequestSpec
from gttx.client import GttxClient
from gttx.errors import (
    AuthorizationExpired,
    AuthorizationFailed,
    GttxError,
    ProviderRejected,
    TransportFailure,
)
from gttx.http import ClientConfig
from gttx.session import Credentials, Session, TokenCache

__all__ = [
    '__version__',
    'ClassifiedResult',
    'Failure',
    'Success',
    'classify',
    'ApiClient',
    'RequestSpec',
    'GttxClient',
    'AuthorizationExpired',
    'AuthorizationFailed',
    'GttxError',
    'ProviderRejected',
    'TransportFailure',
    'ClientConfig',
    'Credentials',
    'Session',
    'TokenCache',
]
