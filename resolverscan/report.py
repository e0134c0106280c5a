# -*- encoding: utf-8 -*-
"""
    JSON report of the open resolvers found, POSTed to a collector.
"""

import socket
import requests

REPORT_TOPIC = 'sec.dns-open'


def parse_headers(headers):
    user_headers = {}
    for h in headers or []:
        if ':' not in h:
            raise ValueError('Invalid header %r, expected "Name: value"' % h)
        k, v = h.split(':', 1)
        user_headers[k.strip()] = v.strip()
    return user_headers


def build_reports(open_resolvers):
    hostname = socket.gethostname().split('.')[0]
    reports = []
    for resolver in open_resolvers:
        reports.append({
            'topic': REPORT_TOPIC,
            'username': str(resolver),
            'hostname': hostname,
            'value': 'Open resolver %s. Client must secure or firewall' % resolver,
        })
    return reports


def post_report(url, open_resolvers, headers=None, timeout=120):
    response = requests.post(url, json=build_reports(open_resolvers),
                             headers=parse_headers(headers), timeout=timeout)
    response.raise_for_status()
    return response
