# -*- encoding: utf-8 -*-

import optparse
from .iprange import parse_range, AddressRangeError

DEFAULT_FQDN = 'www.google.com'


def build_parser():
    usage = 'Usage: %prog [options] range\n' \
            '  range: 198.51.100.7, 198.51.100.0/24 or 198.51.100.1-198.51.100.99'
    parser = optparse.OptionParser(usage)
    parser.add_option('-q', '--queries', dest='queries', type='int', default=100,
                      help='Number of DNS queries kept in flight, default 100')
    parser.add_option('-r', '--retries', dest='retries', type='int', default=2,
                      help='Retries per query, default 2')
    parser.add_option('-t', '--timeout', dest='timeout', type='int', default=2,
                      help='Per query timeout in seconds, default 2. '
                           'Unanswered queries are dropped after twice this')
    parser.add_option('-f', '--fqdn', dest='fqdn', default=DEFAULT_FQDN,
                      help='Name queried against every target, default %s' % DEFAULT_FQDN)
    parser.add_option('-v', '--verbose', dest='verbose', action='store_true', default=False,
                      help='Show progress')
    parser.add_option('-u', '--url', dest='report_url', default='',
                      help='POST a JSON report of open resolvers to this URL')
    parser.add_option('-H', '--header', dest='headers', action='append',
                      default=['Content-Type: application/json'],
                      help='Header for the JSON report, "Name: value", repeatable')
    return parser


def parse_args(argv=None):
    parser = build_parser()
    (options, args) = parser.parse_args(argv)
    if len(args) < 1:
        parser.error('You should specify an address range')
    if len(args) > 1:
        parser.error('Only one address range can be scanned at a time')
    if options.queries < 1:
        parser.error('--queries must be at least 1')
    if options.retries < 0:
        parser.error('--retries can not be negative')
    if options.timeout < 1:
        parser.error('--timeout must be at least 1 second')
    try:
        address_range = parse_range(args[0])
    except AddressRangeError as e:
        parser.error(str(e))
    return options, address_range
