import datetime as dt
import enum
import json

import pytest

from gttx import GttxClient, RequestSpec
from gttx.resources import ENDPOINTS, Endpoint, Param, shape_value


class Protocol(enum.Enum):
    TCP = 'tcp'
    UDP = 'udp'


WHEN = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)


def test_endpoint_names_are_unique():
    names = [e.name for e in ENDPOINTS]
    assert len(names) == len(set(names))


def test_every_endpoint_is_bound():
    for endpoint in ENDPOINTS:
        method = getattr(GttxClient, endpoint.name)
        assert method.__name__ == endpoint.name
        assert endpoint.path.startswith('/xddos/')


@pytest.mark.parametrize(
    ('value', 'in_query', 'expected'),
    [
        (WHEN, True, 1704067200),
        (WHEN, False, 1704067200),
        (dt.date(2024, 1, 2), True, '2024-01-02'),
        (True, True, 1),
        (False, True, 0),
        (True, False, True),
        (['a', 'b'], True, 'a,b'),
        ([1, 2], False, [1, 2]),
        (Protocol.TCP, True, 'tcp'),
        ({'at': WHEN}, False, {'at': 1704067200}),
        ('plain', True, 'plain'),
    ],
)
def test_shape_value(value, in_query, expected):
    assert shape_value(value, in_query=in_query) == expected


class TestEndpointBuild:
    endpoint = Endpoint(
        'update_thing', 'PATCH', '/xddos/thing',
        query=(Param('thing_id', 'thingId', required=True), Param('ids', 'ids')),
        body=(Param('name', 'name'), Param('protocol', 'protocol')),
    )

    def test_build(self):
        spec = self.endpoint.build(thing_id=5, ids=[1, 2], name='web', protocol=Protocol.UDP)
        assert spec == RequestSpec(
            method='PATCH',
            path='/xddos/thing',
            params={'thingId': 5, 'ids': '1,2'},
            body={'name': 'web', 'protocol': 'udp'},
        )

    def test_none_values_are_dropped(self):
        spec = self.endpoint.build(thing_id=5, name=None)
        assert spec.params == {'thingId': 5}
        assert spec.body == {}

    def test_unknown_keyword(self):
        with pytest.raises(TypeError, match='colour'):
            self.endpoint.build(thing_id=5, colour='red')

    def test_missing_required(self):
        with pytest.raises(TypeError, match='thing_id'):
            self.endpoint.build(name='web')

    def test_query_only_endpoint_has_no_body(self):
        endpoint = Endpoint('get_thing', 'GET', '/xddos/thing', query=(Param('x', 'x'),))
        assert endpoint.build(x=1).body is None

    def test_describe_lists_parameters(self):
        doc = self.endpoint.describe()
        assert 'thing_id' in doc
        assert 'name, optional' in doc


@pytest.mark.asyncio
class TestResourceMethods:

    async def test_query_endpoint(self, make_client, provider):
        async with make_client() as client:
            result = await client.list_attacks(ip='203.0.113.7', start_time=WHEN, page_size=20)

        assert result == {'apiStatus': 0, 'result': {}}
        request = provider.requests[0]
        assert request.method == 'GET'
        assert request.url.path == '/xddos/attack/list'
        assert dict(request.url.params) == {
            'ip': '203.0.113.7',
            'startTime': '1704067200',
            'pageSize': '20',
        }
        assert request.headers['Authorization'] == 'token-1'

    async def test_body_endpoint(self, make_client, provider):
        async with make_client() as client:
            await client.create_forward_rule(
                instance_id='ins-1',
                protocol='tcp',
                port=443,
                origins=['198.51.100.1', '198.51.100.2'],
                origin_port=8443,
            )

        request = provider.requests[0]
        assert request.method == 'POST'
        assert request.url.path == '/xddos/forward'
        assert json.loads(request.read()) == {
            'instanceId': 'ins-1',
            'protocol': 'tcp',
            'port': 443,
            'origins': ['198.51.100.1', '198.51.100.2'],
            'originPort': 8443,
        }

    async def test_delete_with_list(self, make_client, provider):
        async with make_client() as client:
            await client.delete_forward_rule(rule_ids=[3, 4])

        request = provider.requests[0]
        assert request.method == 'DELETE'
        assert request.url.params['ruleIds'] == '3,4'

    async def test_missing_argument_sends_nothing(self, make_client, provider):
        async with make_client() as client:
            with pytest.raises(TypeError):
                await client.get_attack()

        assert provider.calls == 0
        assert provider.auth_calls == 0
