'''
**gttx.session**
----------------

The credentials a client is built with and the session token it obtains
from them. A ``TokenCache`` is owned by a single client instance, nothing is
shared across clients.
'''
import dataclasses as dc
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

# 25 minutes, below the provider's actual token lifetime
SESSION_VALIDITY_SECONDS = 60 * 25


@dc.dataclass(frozen=True, slots=True)
class Credentials:
    app_id: str
    secret_key: str

    def __repr__(self) -> str:
        return f'Credentials(app_id={self.app_id!r}, secret_key=***)'

    def as_query(self) -> dict[str, str]:
        return {
            'appId': self.app_id,
            'secretKey': self.secret_key,
        }


@dc.dataclass(frozen=True, slots=True)
class Session:
    token: str
    issued_at: float

    def __repr__(self) -> str:
        return f'Session(token=***, issued_at={self.issued_at!r})'

    def age(self, now: float) -> float:
        return now - self.issued_at


class TokenCache:
    '''
    Holds the most recently issued ``Session``.

    ``set`` always supersedes the previous session, ``invalidate`` only drops
    the session when it still carries the token that was rejected.
    '''
    __slots__ = (
        '_session',
        '_clock',
        'validity',
    )

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        validity: float = SESSION_VALIDITY_SECONDS,
    ) -> None:
        self._session: Session | None = None
        self._clock = clock
        self.validity: float = validity

    def now(self) -> float:
        return self._clock()

    def get(self) -> Session | None:
        return self._session

    def set(self, token: str) -> Session:
        self._session = Session(token=token, issued_at=self.now())
        logger.debug('Cached a new session token')
        return self._session

    def is_valid(self, session: Session | None, now: float | None = None) -> bool:
        '''
        Parameters
        ----------
        session : Session | None
        now : float | None, optional
            Seconds since the epoch, the cache clock is used when omitted

        Returns
        -------
        bool
            True iff the session exists and is younger than the validity window
        '''
        if session is None:
            return False
        if now is None:
            now = self.now()
        return session.age(now) < self.validity

    def current(self) -> Session | None:
        '''
        The cached session if it is still valid, otherwise None.
        '''
        if self.is_valid(self._session):
            return self._session
        return None

    def invalidate(self, token: str) -> bool:
        if self._session is None or self._session.token != token:
            return False
        self._session = None
        logger.debug('Dropped a rejected session token')
        return True
