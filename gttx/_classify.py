'''
Classification of the provider's response envelope.

The provider always answers with ``{"apiStatus": 0 | 1, "result": ...}``,
``apiStatus == 1`` marks a failure whose ``result`` holds ``error_code`` and
``error_en``.
'''
import dataclasses as dc
import logging
from typing import Any

from gttx.errors import AuthorizationExpired, ProviderRejected

logger = logging.getLogger(__name__)

FAILURE_STATUS = 1
UNAUTHORIZED_CODE = 4


@dc.dataclass(frozen=True, slots=True)
class Success:
    payload: Any


@dc.dataclass(frozen=True, slots=True)
class Failure:
    code: int | None
    message: str

    @property
    def is_unauthorized(self) -> bool:
        return self.code == UNAUTHORIZED_CODE

    def to_exception(self) -> ProviderRejected:
        '''
        Map the failure onto the exception a resource call raises.

        Returns
        -------
        ProviderRejected
            ``AuthorizationExpired`` for code 4, ``ProviderRejected`` otherwise
        '''
        if self.is_unauthorized:
            return AuthorizationExpired(self.message, self.code)
        return ProviderRejected(self.message, self.code)


ClassifiedResult = Success | Failure


def _parse_code(raw: Any) -> int | None:
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning(f'Provider returned a non-numeric error code: {raw!r}')
        return None


def _is_failure(status: Any) -> bool:
    # numeric 1 only, a string "1" or True is not the failure flag
    if isinstance(status, (bool, str)):
        return False
    return status == FAILURE_STATUS


def classify(body: Any) -> ClassifiedResult:
    '''
    Inspect a decoded response body.

    Parameters
    ----------
    body : Any
        The JSON decoded response body

    Returns
    -------
    ClassifiedResult
        ``Success`` wrapping the body untouched, or ``Failure`` with the
        parsed error code and English message.
    '''
    if not isinstance(body, dict) or not _is_failure(body.get('apiStatus')):
        return Success(body)

    result = body.get('result')
    if not isinstance(result, dict):
        result = {}

    message = (
        result.get('error_en')
        or result.get('error_cn')
        or 'Provider rejected the request'
    )
    return Failure(code=_parse_code(result.get('error_code')), message=str(message))
