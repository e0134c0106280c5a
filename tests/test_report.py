import pytest

from resolverscan import report


def test_parse_headers():
    assert report.parse_headers(['Content-Type: application/json', 'X-Token:abc:def']) == {
        'Content-Type': 'application/json', 'X-Token': 'abc:def'}
    with pytest.raises(ValueError):
        report.parse_headers(['no-colon'])


def test_post_report(monkeypatch):
    sent = {}

    class FakeResponse(object):
        def raise_for_status(self):
            pass

    def fake_post(url, json=None, headers=None, timeout=None):
        sent.update(url=url, json=json, headers=headers, timeout=timeout)
        return FakeResponse()

    monkeypatch.setattr(report.requests, 'post', fake_post)
    monkeypatch.setattr(report.socket, 'gethostname', lambda: 'scanner.example.net')
    report.post_report('http://collector.example/report', ['198.51.100.7'], ['X-Key: 1'])

    assert sent['url'] == 'http://collector.example/report'
    assert sent['headers'] == {'X-Key': '1'}
    assert sent['json'] == [{
        'topic': 'sec.dns-open',
        'username': '198.51.100.7',
        'hostname': 'scanner',
        'value': 'Open resolver 198.51.100.7. Client must secure or firewall',
    }]
