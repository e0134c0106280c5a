# -*- encoding: utf-8 -*-
"""
    Address range parsing.
    Accepts a single address, a CIDR block or a "start-end" range and hands
    the scanner a forward-only iterator over every address in it.
"""

import ipaddress


class AddressRangeError(ValueError):
    pass


class AddressRange(object):
    def __init__(self, first, last):
        self.first = first
        self.last = last

    @property
    def num_addresses(self):
        return int(self.last) - int(self.first) + 1

    def __iter__(self):
        # never materialize the range, a /8 is 16M addresses
        address = self.first
        end = int(self.last)
        while True:
            yield address
            if int(address) >= end:
                return
            address += 1

    def __len__(self):
        return self.num_addresses

    def __str__(self):
        if self.first == self.last:
            return str(self.first)
        return '%s-%s' % (self.first, self.last)


def _parse_address(text):
    try:
        return ipaddress.ip_address(text.strip())
    except ValueError:
        raise AddressRangeError('Invalid address: %r' % text.strip())


def parse_range(text):
    '''
    :param text: "198.51.100.7", "198.51.100.0/30" or "198.51.100.1-198.51.100.9"
    :return: AddressRange
    '''
    text = (text or '').strip()
    if not text:
        raise AddressRangeError('Empty address range')

    if '/' in text:
        try:
            network = ipaddress.ip_network(text, strict=False)
        except ValueError:
            raise AddressRangeError('Invalid CIDR block: %r' % text)
        return AddressRange(network.network_address, network.broadcast_address)

    if '-' in text:
        start, _, end = text.partition('-')
        first, last = _parse_address(start), _parse_address(end)
        if first.version != last.version:
            raise AddressRangeError('Mixed IPv4/IPv6 range: %r' % text)
        if first > last:
            raise AddressRangeError('Range start is after range end: %r' % text)
        return AddressRange(first, last)

    address = _parse_address(text)
    return AddressRange(address, address)
