"""Shared fixtures for unit tests."""

import pytest

from domain_util.config import reset_config
from domain_util.database import reset_database
from domain_util.matching import reset_matcher

IANA_PAGE = b"""<!DOCTYPE html>
<html>
<body>
<table id="tld-table">
  <tbody>
    <tr>
      <td><span class="domain tld"><a href="/domains/root/db/com.html">.com</a></span></td>
      <td>generic</td>
    </tr>
    <tr>
      <td><span class="domain tld"><a href="/domains/root/db/uk.html">.uk</a></span></td>
      <td>country-code</td>
    </tr>
    <tr>
      <td><span class="domain tld"><a href="/domains/root/db/org.html">.ORG</a></span></td>
      <td>generic</td>
    </tr>
    <tr>
      <td><span class="domain"><a href="/domains/root/db/net.html">.net</a></span></td>
      <td>not a tld span</td>
    </tr>
  </tbody>
</table>
</body>
</html>
"""

SUFFIX_LIST = b"""// This Source Code Form is subject to the terms of the Mozilla Public
// License, v. 2.0.

// ===BEGIN ICANN DOMAINS===

// com : https://en.wikipedia.org/wiki/.com
com

// uk : https://en.wikipedia.org/wiki/.uk
uk
co.uk
  org.uk

// ck : https://en.wikipedia.org/wiki/.ck
*.ck
!www.ck

// ===END ICANN DOMAINS===
// ===BEGIN PRIVATE DOMAINS===
github.io
// ===END PRIVATE DOMAINS===
"""


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """
    Replays a scripted sequence of responses.

    Each item is either a FakeResponse or an exception instance to raise.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Records requested waits instead of sleeping."""

    def __init__(self):
        self.waits = []

    def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture(autouse=True)
def reset_globals():
    """Isolate the module-level config, database and matcher per test."""
    reset_config()
    reset_database()
    reset_matcher()
    yield
    reset_config()
    reset_database()
    reset_matcher()


@pytest.fixture
def sleeper():
    return RecordingSleep()
