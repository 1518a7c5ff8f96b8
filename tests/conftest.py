"""Shared fixtures: a scripted stand-in for the HTTPS transport."""

import time

import pytest
from lxml import etree

from imc_errors import TransportError
from imc_xmlapi_lib import xml_api_lib


def reply(tag, inner="", **attrs):
    """Build a successful CIMC response document for tag."""
    attrs.setdefault("response", "yes")
    rendered = "".join(f' {key}="{value}"' for key, value in attrs.items())
    return f'<{tag} cookie=""{rendered}>{inner}</{tag}>'


class FakeTransport:
    """Records every request and answers from per-operation handlers.

    A handler receives the parsed request element and returns response XML,
    or an exception instance to raise from post().
    """

    def __init__(self):
        self.requests = []
        self.ping_results = []
        self.pings = 0
        self.resets = 0
        self.logins = 0
        self.handlers = {
            "aaaLogin": self._login,
            "aaaRefresh": self._refresh,
            "aaaLogout": lambda request: reply("aaaLogout", outStatus="success"),
        }

    def _login(self, request):
        self.logins += 1
        return reply("aaaLogin", outCookie=f"cookie-{self.logins}", outRefreshPeriod="600", outPriv="admin")

    def _refresh(self, request):
        return reply("aaaRefresh", outCookie="refreshed-cookie", outRefreshPeriod="600")

    def ping(self):
        self.pings += 1
        if self.ping_results:
            return self.ping_results.pop(0)
        return True

    def post(self, body):
        request = etree.fromstring(body)
        self.requests.append(request)
        handler = self.handlers.get(request.tag)
        if handler is None:
            raise AssertionError(f"unexpected request {request.tag}")
        result = handler(request)
        if isinstance(result, Exception):
            raise result
        return result.encode()

    def reset(self):
        self.resets += 1

    close = reset

    def sent(self, tag):
        return [request for request in self.requests if request.tag == tag]


def failing(status="503 Service Unavailable"):
    return lambda request: TransportError(status)


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    """Replace time.sleep so retry backoffs and polls return immediately."""
    calls = []
    monkeypatch.setattr(time, "sleep", calls.append)
    return calls


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return xml_api_lib("10.0.0.10", "admin", "password", hostname="cimc-test", transport=transport)


@pytest.fixture
def logged_in(client):
    """Client holding a cookie that is well inside its validity period."""
    client.session.cookie = "preset-cookie"
    client.session.valid_until = time.time() + 3600
    return client
