# -*- encoding: utf-8 -*-

import asyncio
import aiodns
from async_timeout import timeout


async def async_check_fqdn(fqdn, query_timeout=3):
    '''
    Make sure the probe name resolves through the normal resolver chain.
    If it does not, no target could ever answer it and every result is a miss.
    :param fqdn:          name that will be queried against every target
    :param query_timeout: seconds to wait for the answer
    :return: list of addresses, empty on failure
    '''
    resolver = aiodns.DNSResolver(timeout=query_timeout, tries=1)
    try:
        async with timeout(query_timeout + 0.5):
            answers = await resolver.query(fqdn, 'A')
    except (aiodns.error.DNSError, asyncio.TimeoutError):
        return []
    return sorted(answer.host for answer in answers)


def check_fqdn(fqdn, query_timeout=3):
    return asyncio.run(async_check_fqdn(fqdn, query_timeout))
