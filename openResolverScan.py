#!/usr/bin/env python
# -*- encoding: utf-8 -*-
"""
    openResolverScan
    Probe every address of an IPv4/IPv6 range for open (recursive) DNS resolvers
"""

import sys
import signal
import requests
from resolverscan.classifier import NO_ANSWER, TIMED_OUT
from resolverscan.cmdline import parse_args
from resolverscan.common import print_msg, user_abort
from resolverscan.report import post_report
from resolverscan.sanity import check_fqdn
from resolverscan.scanner import OpenResolverScan, InFlightTableError


def main(argv=None):
    options, address_range = parse_args(argv)

    if options.verbose:
        print_msg('[+] Check %s is resolvable' % options.fqdn, line_feed=True)
    ips = check_fqdn(options.fqdn)
    if not ips:
        print_msg('[ERROR] Can not resolve %s, pick another name with --fqdn' % options.fqdn,
                  line_feed=True)
        return 1
    if options.verbose:
        print_msg('[+] %s resolves to %s' % (options.fqdn, ', '.join(ips)), line_feed=True)
        print_msg('[+] Scan %s addresses of %s, %s queries at once' % (
            address_range.num_addresses, address_range, options.queries), line_feed=True)

    s = OpenResolverScan(address_range, options)
    try:
        stats = s.run()
    except InFlightTableError as e:
        print_msg('[ERROR] %s' % e, line_feed=True)
        return 1

    msg = 'All Done. %s found, %s no answer, %s timed out, %s scanned in %.1f seconds.' % (
        stats.found, stats.counts[NO_ANSWER], stats.counts[TIMED_OUT],
        stats.completed, stats.elapsed())
    print_msg(msg, line_feed=True)

    if options.report_url:
        try:
            post_report(options.report_url, s.open_resolvers, options.headers)
        except (requests.RequestException, ValueError) as e:
            print_msg('[ERROR] Report to %s failed: %s' % (options.report_url, e), line_feed=True)
    return 0


def run_main():
    signal.signal(signal.SIGINT, user_abort)
    sys.exit(main())


if __name__ == '__main__':
    run_main()
