import asyncio
import datetime as dt
import logging
import sys

import gttx


def attacks_str(ip: str, body: dict) -> str:
    sep = '-------------------------'
    result = body.get('result') or {}
    events = result.get('list', []) if isinstance(result, dict) else result
    string = f'\n{sep}\nAttacks on {ip} in the last 24h\n'
    for event in events:
        string += f'- {event}\n'

    string += f'Total events: {len(events)}\n{sep}'
    return string


async def main() -> int:
    if len(sys.argv) < 4:
        app_id = input('Application id: ').strip()
        secret_key = input('Secret key: ').strip()
        ip_addr = input('Protected IP address: ').strip()
    else:
        app_id, secret_key, ip_addr = (arg.strip() for arg in sys.argv[1:4])

    logging.basicConfig(level=logging.INFO)
    end = dt.datetime.now(dt.timezone.utc)

    exit_code = 1
    try:
        async with gttx.GttxClient(app_id, secret_key, {'unauthorizedRetry': 1}) as client:
            body = await client.list_attacks(
                ip=ip_addr,
                start_time=end - dt.timedelta(days=1),
                end_time=end,
            )
        print(attacks_str(ip_addr, body))
        exit_code = 0
    except gttx.AuthorizationFailed as exc:
        print(f'Credentials rejected: {exc}')
    except gttx.ProviderRejected as exc:
        print(f'Request rejected by the provider: {exc}')
    except gttx.TransportFailure as exc:
        print(f'Error reaching the API, check your network connection {exc}')

    return exit_code


if __name__ == '__main__':
    sys.exit(
        asyncio.run(main())
    )
