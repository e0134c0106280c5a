# -*- encoding: utf-8 -*-
"""
    One DNS query against one target, issued without blocking.
    The query is sent to the target itself with recursion desired, so any
    answer for a name the target is not authoritative for means it recursed.
"""

import asyncio
import dns.asyncresolver
import dns.exception
import dns.name
import dns.rdatatype

DNS_PORT = 53
# outer bound on a probe's life, independent of the resolver's own retries
STALENESS_FACTOR = 2


class ProbeClient(object):
    def __init__(self, timeout, retries, port=DNS_PORT):
        self.timeout = timeout
        self.retries = retries
        self.timed_out = False
        # configure=False: no resolv.conf, so no search list and no default domain
        self.resolver = dns.asyncresolver.Resolver(configure=False)
        self.resolver.search = []
        self.resolver.use_search_by_default = False
        self.resolver.port = port
        self.resolver.timeout = float(timeout)
        # the scanner's staleness sweep must retire a silent target before the session gives up
        self.resolver.lifetime = float(timeout) * max(retries + 1, STALENESS_FACTOR + 1)
        self.handle = None

    async def do_query(self, qname):
        return await self.resolver.resolve(qname, dns.rdatatype.A, search=False,
                                           raise_on_no_answer=False)

    def dispatch(self, target, fqdn):
        """Start the query and return its readiness handle (an asyncio Task)."""
        self.resolver.nameservers = [str(target)]
        qname = dns.name.from_text(fqdn)
        self.handle = asyncio.ensure_future(self.do_query(qname))
        return self.handle

    def harvest(self, handle):
        '''
        :param handle: a handle returned by dispatch() that is already done
        :return: the response message, possibly with no answer records, or None
                 when nothing usable came back. timed_out tells a silent target
                 apart from a session failure (refused, NXDOMAIN, malformed, send error)
        '''
        if handle.cancelled():
            return None
        try:
            answer = handle.result()
        except dns.exception.Timeout:
            self.timed_out = True
            return None
        except (dns.exception.DNSException, OSError):
            return None
        return answer.response

    def abandon(self):
        if self.handle is not None and not self.handle.done():
            self.handle.cancel()
