import asyncio
import optparse

import dns.message
import dns.rrset
import pytest

FQDN = 'www.google.com'


def make_response(*addresses):
    query = dns.message.make_query(FQDN, 'A')
    response = dns.message.make_response(query)
    if addresses:
        response.answer.append(dns.rrset.from_text(FQDN + '.', 300, 'IN', 'A', *addresses))
    return response


def set_once(future, value):
    if not future.done():
        future.set_result(value)


class FakeClient(object):
    '''
    Simulated target, driven by a plan: target -> (kind, delay)
    kind is "answer", "empty", "fail" or "silent" (never answers).
    '''

    def __init__(self, plan, tracker, timeout, retries):
        self.plan = plan
        self.tracker = tracker
        self.timeout = timeout
        self.retries = retries
        self.timed_out = False
        self.handle = None

    def dispatch(self, target, fqdn):
        loop = asyncio.get_running_loop()
        self.handle = loop.create_future()
        kind, delay = self.plan.get(str(target), ('silent', 0))
        if kind != 'silent':
            loop.call_later(delay, set_once, self.handle, kind)
        self.tracker.dispatched(str(target), self.retries)
        return self.handle

    def harvest(self, handle):
        self.tracker.released()
        kind = handle.result()
        if kind == 'answer':
            return make_response('192.0.2.1')
        if kind == 'empty':
            return make_response()
        return None

    def abandon(self):
        self.tracker.released()
        self.handle.cancel()


class Tracker(object):
    def __init__(self):
        self.live = 0
        self.max_live = 0
        self.targets = []
        self.retries = set()

    def dispatched(self, target, retries):
        self.live += 1
        self.max_live = max(self.max_live, self.live)
        self.targets.append(target)
        self.retries.add(retries)

    def released(self):
        self.live -= 1


@pytest.fixture
def tracker():
    return Tracker()


@pytest.fixture
def fake_factory(tracker):
    def build(plan):
        return lambda timeout, retries: FakeClient(plan, tracker, timeout, retries)
    return build


def make_options(**kwargs):
    values = dict(queries=100, retries=2, timeout=2, fqdn=FQDN, verbose=False)
    values.update(kwargs)
    return optparse.Values(values)
