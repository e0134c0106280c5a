# -*- encoding: utf-8 -*-

import time
import asyncio
import itertools
from .classifier import classify, OPEN_RESOLVER, NO_ANSWER, TIMED_OUT
from .common import print_msg, print_open_resolver
from .probe import ProbeClient, STALENESS_FACTOR

POLL_INTERVAL = 1.0
PROGRESS_INTERVAL = 0.5


class InFlightTableError(RuntimeError):
    pass


class ProbeState(object):
    __slots__ = ('target', 'handle', 'handle_id', 'dispatched_at', 'client')

    def __init__(self, target, handle, handle_id, dispatched_at, client):
        self.target = target
        self.handle = handle
        self.handle_id = handle_id
        self.dispatched_at = dispatched_at
        self.client = client


class InFlightTable(object):
    """handle id -> ProbeState, plus a readiness index handle -> handle id."""

    def __init__(self):
        self.states = {}
        self.ids = {}
        self.serial = itertools.count(1)

    def __len__(self):
        return len(self.states)

    def add(self, target, handle, client, dispatched_at):
        if handle in self.ids:
            raise InFlightTableError('Handle dispatched twice for %s' % target)
        handle_id = next(self.serial)
        state = ProbeState(target, handle, handle_id, dispatched_at, client)
        self.states[handle_id] = state
        self.ids[handle] = handle_id
        return state

    def pop(self, handle):
        try:
            handle_id = self.ids.pop(handle)
        except KeyError:
            raise InFlightTableError('Ready handle %r has no probe state' % handle)
        return self.states.pop(handle_id)

    def handles(self):
        return list(self.ids)

    def stale(self, now, deadline):
        return [state for state in self.states.values() if now - state.dispatched_at > deadline]


class ScanStats(object):
    def __init__(self):
        self.start_time = time.time()
        self.dispatched = 0
        self.completed = 0
        self.max_in_flight = 0
        self.counts = {OPEN_RESOLVER: 0, NO_ANSWER: 0, TIMED_OUT: 0}

    @property
    def found(self):
        return self.counts[OPEN_RESOLVER]

    def elapsed(self):
        return time.time() - self.start_time


class OpenResolverScan(object):
    def __init__(self, addresses, options, client_factory=None, on_result=None,
                 poll_interval=None):
        '''
        :param addresses:      iterable of target addresses, consumed forward-only
        :param options:        at_once / queries, retries, timeout, fqdn, verbose
        :param client_factory: called as client_factory(timeout, retries) per probe
        :param on_result:      called as on_result(target, category) for every target
        :param poll_interval:  bound on one readiness wait, defaults to min(1s, timeout)
        '''
        self.cursor = iter(addresses)
        self.exhausted = False
        self.options = options
        self.at_once = options.queries
        self.timeout = options.timeout
        self.retries = options.retries
        self.fqdn = options.fqdn
        self.verbose = getattr(options, 'verbose', False)
        self.client_factory = client_factory or ProbeClient
        self.on_result = on_result if on_result is not None else self.report
        if poll_interval is None:
            poll_interval = min(POLL_INTERVAL, self.timeout)
        self.poll_interval = poll_interval
        self.staleness_deadline = STALENESS_FACTOR * self.timeout
        self.in_flight = InFlightTable()
        self.stats = ScanStats()
        self.open_resolvers = []
        self.last_progress = 0

    def report(self, target, category):
        if category == OPEN_RESOLVER:
            print_open_resolver(target)
        elif self.verbose:
            print_msg('[-] %s from %s' % (category.replace('_', ' '), target), line_feed=True)

    def fill(self):
        while len(self.in_flight) < self.at_once and not self.exhausted:
            try:
                target = next(self.cursor)
            except StopIteration:
                self.exhausted = True
                break
            client = self.client_factory(self.timeout, self.retries)
            handle = client.dispatch(target, self.fqdn)
            self.in_flight.add(target, handle, client, time.time())
            self.stats.dispatched += 1
        self.stats.max_in_flight = max(self.stats.max_in_flight, len(self.in_flight))

    def finish(self, state, category):
        self.stats.counts[category] += 1
        self.stats.completed += 1
        if category == OPEN_RESOLVER:
            self.open_resolvers.append(state.target)
        self.on_result(state.target, category)

    def harvest(self, ready):
        for handle in ready:
            state = self.in_flight.pop(handle)
            response = state.client.harvest(handle)
            timed_out = getattr(state.client, 'timed_out', False)
            self.finish(state, classify(response, timed_out=timed_out))

    def sweep(self):
        for state in self.in_flight.stale(time.time(), self.staleness_deadline):
            self.in_flight.pop(state.handle)
            # releases the query task and its socket, nothing is sent to the target
            state.client.abandon()
            self.finish(state, classify(None, timed_out=True))

    def update_counter(self, force=False):
        if not self.verbose:
            return
        now = time.time()
        if not force and now - self.last_progress < PROGRESS_INTERVAL:
            return
        self.last_progress = now
        msg = '%s found, %s scanned, %s in flight in %.1f seconds' % (
            self.stats.found, self.stats.completed, len(self.in_flight), self.stats.elapsed())
        print_msg(msg)

    async def async_run(self):
        self.stats.start_time = time.time()
        while True:
            self.fill()
            if not self.in_flight:
                break
            ready, _ = await asyncio.wait(self.in_flight.handles(), timeout=self.poll_interval,
                                          return_when=asyncio.FIRST_COMPLETED)
            if ready:
                self.harvest(ready)
            else:
                self.sweep()
            self.update_counter()
        self.update_counter(force=True)
        return self.stats

    def run(self):
        return asyncio.run(self.async_run())
