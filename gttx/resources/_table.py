'''
The provider's resource endpoints, grouped the way the API groups them.

Only ``/xddos/public/authorize`` (in ``gttx.auth``) is a confirmed provider route.
The paths below are assumed, laid out under the same ``/xddos`` prefix, and
need checking against the provider's API reference before relying on them.

Times accept ``datetime`` objects and are sent as unix seconds.
'''
from gttx.resources._endpoint import Endpoint, Param


def _paging() -> tuple[Param, ...]:
    return (
        Param('page', 'page'),
        Param('page_size', 'pageSize'),
    )


def _window(required: bool = True) -> tuple[Param, ...]:
    return (
        Param('start_time', 'startTime', required=required),
        Param('end_time', 'endTime', required=required),
    )


ATTACKS = (
    Endpoint(
        'list_attacks', 'GET', '/xddos/attack/list',
        query=(Param('ip', 'ip'), *_window(required=False), *_paging()),
        summary='List attack events, newest first.',
    ),
    Endpoint(
        'get_attack', 'GET', '/xddos/attack/detail',
        query=(Param('attack_id', 'attackId', required=True),),
        summary='Details of a single attack event.',
    ),
    Endpoint(
        'get_attack_report', 'GET', '/xddos/attack/report',
        query=(Param('ip', 'ip', required=True), *_window()),
        summary='Aggregated attack report for a protected IP.',
    ),
)

TRAFFIC = (
    Endpoint(
        'get_traffic_trend', 'GET', '/xddos/traffic/trend',
        query=(Param('ip', 'ip', required=True), *_window(), Param('interval', 'interval')),
        summary='Inbound and cleaned traffic over time.',
    ),
    Endpoint(
        'get_bandwidth_trend', 'GET', '/xddos/traffic/bandwidth',
        query=(Param('ip', 'ip', required=True), *_window(), Param('interval', 'interval')),
        summary='Bandwidth usage over time.',
    ),
    Endpoint(
        'get_connection_trend', 'GET', '/xddos/traffic/connection',
        query=(Param('ip', 'ip', required=True), *_window(), Param('interval', 'interval')),
        summary='Concurrent and new connections over time.',
    ),
)

BLACKHOLE = (
    Endpoint(
        'list_blackholes', 'GET', '/xddos/blackhole/list',
        query=(Param('ip', 'ip'), *_paging()),
        summary='IPs currently held in the blackhole.',
    ),
    Endpoint(
        'get_blackhole_quota', 'GET', '/xddos/blackhole/quota',
        summary='Remaining blackhole releases for the account.',
    ),
    Endpoint(
        'release_blackhole', 'POST', '/xddos/blackhole/release',
        body=(Param('ip', 'ip', required=True),),
        summary='Release an IP from the blackhole ahead of schedule.',
    ),
)

DOMAINS = (
    Endpoint(
        'list_domains', 'GET', '/xddos/domain/list',
        query=(Param('domain', 'domain'), Param('instance_id', 'instanceId'), *_paging()),
        summary='Domains configured for protection.',
    ),
    Endpoint(
        'get_domain', 'GET', '/xddos/domain/detail',
        query=(Param('domain', 'domain', required=True),),
        summary='Configuration of one protected domain.',
    ),
    Endpoint(
        'create_domain', 'POST', '/xddos/domain',
        body=(
            Param('instance_id', 'instanceId', required=True),
            Param('domain', 'domain', required=True),
            Param('origins', 'origins', required=True),
            Param('protocols', 'protocols'),
            Param('https_redirect', 'httpsRedirect'),
            Param('certificate', 'certificate'),
            Param('private_key', 'privateKey'),
        ),
        summary='Put a domain under protection.',
    ),
    Endpoint(
        'update_domain', 'PATCH', '/xddos/domain',
        body=(
            Param('domain', 'domain', required=True),
            Param('origins', 'origins'),
            Param('protocols', 'protocols'),
            Param('https_redirect', 'httpsRedirect'),
            Param('certificate', 'certificate'),
            Param('private_key', 'privateKey'),
        ),
        summary='Change the configuration of a protected domain.',
    ),
    Endpoint(
        'delete_domain', 'DELETE', '/xddos/domain',
        query=(Param('domain', 'domain', required=True),),
        summary='Remove a domain from protection.',
    ),
)

FORWARD_RULES = (
    Endpoint(
        'list_forward_rules', 'GET', '/xddos/forward/list',
        query=(Param('instance_id', 'instanceId'), Param('ip', 'ip'), *_paging()),
        summary='Layer 4 forwarding rules.',
    ),
    Endpoint(
        'create_forward_rule', 'POST', '/xddos/forward',
        body=(
            Param('instance_id', 'instanceId', required=True),
            Param('protocol', 'protocol', required=True),
            Param('port', 'port', required=True),
            Param('origins', 'origins', required=True),
            Param('origin_port', 'originPort', required=True),
            Param('remark', 'remark'),
        ),
        summary='Create a forwarding rule.',
    ),
    Endpoint(
        'update_forward_rule', 'PATCH', '/xddos/forward',
        body=(
            Param('rule_id', 'ruleId', required=True),
            Param('origins', 'origins'),
            Param('origin_port', 'originPort'),
            Param('remark', 'remark'),
        ),
        summary='Change a forwarding rule.',
    ),
    Endpoint(
        'delete_forward_rule', 'DELETE', '/xddos/forward',
        query=(Param('rule_ids', 'ruleIds', required=True),),
        summary='Delete forwarding rules, ``rule_ids`` takes one id or a list.',
    ),
)

ORDERS = (
    Endpoint(
        'list_orders', 'GET', '/xddos/order/list',
        query=(Param('status', 'status'), *_window(required=False), *_paging()),
        summary='Orders placed by the account.',
    ),
    Endpoint(
        'get_order', 'GET', '/xddos/order/detail',
        query=(Param('order_id', 'orderId', required=True),),
        summary='Details of one order.',
    ),
    Endpoint(
        'renew_order', 'POST', '/xddos/order/renew',
        body=(
            Param('instance_id', 'instanceId', required=True),
            Param('months', 'months', required=True),
        ),
        summary='Extend a protection instance.',
    ),
    Endpoint(
        'upgrade_order', 'POST', '/xddos/order/upgrade',
        body=(
            Param('instance_id', 'instanceId', required=True),
            Param('bandwidth', 'bandwidth'),
            Param('elastic_bandwidth', 'elasticBandwidth'),
            Param('rule_count', 'ruleCount'),
        ),
        summary='Raise the bandwidth or rule count of a protection instance.',
    ),
)

ENDPOINTS: tuple[Endpoint, ...] = (
    *ATTACKS,
    *TRAFFIC,
    *BLACKHOLE,
    *DOMAINS,
    *FORWARD_RULES,
    *ORDERS,
)
