'''
Declarative description of a resource endpoint and the parameter shaping
that turns keyword arguments into a ``RequestSpec``.
'''
from __future__ import annotations

import dataclasses as dc
import datetime as dt
import enum
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from gttx.api_client import Methods, RequestSpec

if TYPE_CHECKING:
    from gttx.api_client import ApiClient


@dc.dataclass(frozen=True, slots=True)
class Param:
    name: str
    wire: str
    required: bool = False


def shape_value(value: Any, *, in_query: bool) -> Any:
    '''
    Convert a Python value into what the API expects.

    Parameters
    ----------
    value : Any
    in_query : bool
        Query string values are flattened further than JSON body values

    Returns
    -------
    Any
    '''
    if isinstance(value, enum.Enum):
        value = value.value

    if isinstance(value, dt.datetime):
        return int(value.timestamp())

    if isinstance(value, dt.date):
        return value.isoformat()

    if not in_query:
        if isinstance(value, (list, tuple, set, frozenset)):
            return [shape_value(v, in_query=False) for v in value]
        if isinstance(value, dict):
            return {k: shape_value(v, in_query=False) for k, v in value.items()}
        return value

    if isinstance(value, bool):
        return 1 if value else 0

    if isinstance(value, (list, tuple, set, frozenset)):
        return ','.join(str(shape_value(v, in_query=True)) for v in value)

    return value


def _shape_group(params: tuple[Param, ...], values: dict[str, Any], *, in_query: bool) -> dict[str, Any]:
    shaped = {}
    for param in params:
        value = values.get(param.name)
        if value is None:
            continue
        shaped[param.wire] = shape_value(value, in_query=in_query)
    return shaped


@dc.dataclass(frozen=True, slots=True)
class Endpoint:
    '''
    One resource method: its name on the client, HTTP method, fixed path and
    the keyword parameters it accepts.

    Attributes
    ----------
    - query: parameters sent in the query string

    - body: parameters sent as a JSON object body
    '''
    name: str
    method: Methods
    path: str
    query: tuple[Param, ...] = ()
    body: tuple[Param, ...] = ()
    summary: str = ''

    @property
    def params(self) -> tuple[Param, ...]:
        return self.query + self.body

    def build(self, **kwargs: Any) -> RequestSpec:
        '''
        Shape keyword arguments into a request.

        Returns
        -------
        RequestSpec

        Raises
        ------
        TypeError
            On unknown keywords or missing required parameters
        '''
        accepted = {p.name for p in self.params}
        if unknown := sorted(set(kwargs) - accepted):
            raise TypeError(
                f"{self.name}() got unexpected keyword argument(s): {', '.join(unknown)}"
            )

        missing = [
            p.name for p in self.params
            if p.required and kwargs.get(p.name) is None
        ]
        if missing:
            raise TypeError(
                f"{self.name}() missing required argument(s): {', '.join(missing)}"
            )

        body = None
        if self.body:
            body = _shape_group(self.body, kwargs, in_query=False)

        return RequestSpec(
            method=self.method,
            path=self.path,
            params=_shape_group(self.query, kwargs, in_query=True),
            body=body,
        )

    def describe(self) -> str:
        lines = [self.summary or f'{self.method} {self.path}', '', 'Parameters', '----------']
        for param in self.params:
            optional = '' if param.required else ', optional'
            lines.append(f'{param.name}{optional}')
        return '\n'.join(lines)

    def as_method(self) -> Callable[..., Awaitable[Any]]:
        endpoint = self

        async def method(client: ApiClient, **kwargs: Any) -> Any:
            return await client.send(endpoint.build(**kwargs))

        method.__name__ = self.name
        method.__qualname__ = self.name
        method.__doc__ = self.describe()
        return method
