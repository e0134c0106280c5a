import asyncio
from types import SimpleNamespace

import aiodns
import pytest

from resolverscan import sanity


class FakeResolver(object):
    outcome = None

    def __init__(self, timeout=None, tries=None):
        self.timeout = timeout
        self.tries = tries

    async def query(self, host, qtype):
        assert qtype == 'A'
        if isinstance(self.outcome, Exception):
            raise self.outcome
        if self.outcome == 'hang':
            await asyncio.sleep(3600)
        return [SimpleNamespace(host=ip) for ip in self.outcome]


@pytest.fixture
def resolver(monkeypatch):
    monkeypatch.setattr(sanity.aiodns, 'DNSResolver', FakeResolver)
    return FakeResolver


def test_resolvable_name(resolver):
    resolver.outcome = ['192.0.2.2', '192.0.2.1']
    assert sanity.check_fqdn('www.google.com') == ['192.0.2.1', '192.0.2.2']


def test_unresolvable_name(resolver):
    resolver.outcome = aiodns.error.DNSError(4, 'Domain name not found')
    assert sanity.check_fqdn('no-such-name.invalid') == []


def test_hanging_resolver_times_out(resolver):
    resolver.outcome = 'hang'
    assert sanity.check_fqdn('www.google.com', query_timeout=0.05) == []
