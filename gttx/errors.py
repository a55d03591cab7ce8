'''
**gttx.errors**
---------------

Every failure raised by the client carries a numeric ``code`` (``None`` when
the failure never reached the provider's error envelope) and a human readable
``message`` so callers can branch on ``exc.code``.
'''


class GttxError(Exception):
    '''
    Base class for all client failures.
    '''

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: int | None = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f'[{self.code}] {self.message}'

    def __repr__(self) -> str:
        return f'{type(self).__name__}(code={self.code!r}, message={self.message!r})'


class AuthorizationFailed(GttxError):
    '''
    The authorization endpoint rejected the application id / secret key pair,
    or answered without a token. Never retried.
    '''


class ProviderRejected(GttxError):
    '''
    The provider answered a resource call with ``apiStatus == 1``.
    '''


class AuthorizationExpired(ProviderRejected):
    '''
    Code 4, the presented token was rejected. The only retryable failure.

    Parent: ProviderRejected
    '''


class TransportFailure(GttxError):
    '''
    Network errors, non-2xx statuses and undecodable bodies. The provider
    envelope was never inspected, ``code`` is the HTTP status if one exists.
    '''
