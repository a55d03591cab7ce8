'''
**gttx.client**
---------------

``GttxClient`` is the public entry point: the authenticated pipeline from
``gttx.api_client`` plus one async method per resource endpoint.

    async with GttxClient(app_id, secret_key, {'unauthorizedRetry': 1}) as gttx:
        attacks = await gttx.list_attacks(ip='203.0.113.7', page_size=20)
'''
from gttx.api_client import ApiClient
from gttx.resources import ENDPOINTS


class GttxClient(ApiClient):
    '''
    Client for the GTTX DDoS mitigation API. Resource methods take keyword
    arguments only and return the decoded response body.
    '''


for _endpoint in ENDPOINTS:
    setattr(GttxClient, _endpoint.name, _endpoint.as_method())

del _endpoint
