'''
retry policy for calls the provider rejected with code 4 (authorization
rejected or expired)

Only ``AuthorizationExpired`` is retried, every other failure surfaces on the
first attempt. Once the attempts are used up the last failure is re-raised
unchanged so callers keep branching on its ``code``.
'''

import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from gttx.errors import AuthorizationExpired

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class unauthorized_retry:

    def __init__(self, *, retries: int = 0) -> None:
        '''
        Parameters
        ----------
        retries : int, optional
            How many extra attempts a code 4 failure earns, by default 0
        '''
        if retries < 0:
            raise ValueError(f'retries must be >= 0, got {retries}')

        self.retries: int = retries

    @property
    def attempts(self) -> int:
        return self.retries + 1

    async def call_with_retries(
        self,
        func: Callable[P, Awaitable[R]],
        *args,
        **kwargs
    ) -> R:
        for attempt_no in range(1, self.attempts + 1):
            try:
                return await func(*args, **kwargs)
            except AuthorizationExpired:
                if attempt_no == self.attempts:
                    raise
                logger.debug(
                    f'Authorization rejected on attempt {attempt_no}/{self.attempts}, retrying'
                )

        raise AssertionError('unreachable')
