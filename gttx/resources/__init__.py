'''
**gttx.resources**
------------------

The resource endpoints as a declarative table, bound onto ``GttxClient`` as
async methods. See ``gttx.resources._table`` for the full list.
'''
from gttx.resources._endpoint import Endpoint, Param, shape_value
from gttx.resources._table import (
    ATTACKS,
    BLACKHOLE,
    DOMAINS,
    ENDPOINTS,
    FORWARD_RULES,
    ORDERS,
    TRAFFIC,
)

__all__ = [
    'Endpoint',
    'Param',
    'shape_value',
    'ATTACKS',
    'BLACKHOLE',
    'DOMAINS',
    'ENDPOINTS',
    'FORWARD_RULES',
    'ORDERS',
    'TRAFFIC',
]
