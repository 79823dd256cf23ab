"""Unit tests for hostname matching."""

import pytest
from conftest import IANA_PAGE, SUFFIX_LIST, FakeResponse, FakeSession

import domain_util
from domain_util.config import Config
from domain_util.database import SuffixDatabase, get_database
from domain_util.fetch import FetchError, URLFetcher
from domain_util.matching import DomainMatcher, DomainParts, get_matcher


class OfflineFetcher:
    """Fetcher that fails the test if a download is attempted."""

    def fetch(self, url, policy=None):
        raise AssertionError(f"unexpected download of {url}")


def seeded_matcher(suffixes=(), tld_extensions=()):
    db = SuffixDatabase(fetcher=OfflineFetcher(), config=Config())
    db.seed(tld_extensions=tld_extensions, suffixes=suffixes)
    return DomainMatcher(db)


class TestStripSubdomains:
    """Test suite for DomainMatcher.strip_subdomains."""

    @pytest.fixture
    def matcher(self):
        return seeded_matcher(suffixes={"com", "co.uk", "uk", "github.io", "io"})

    def test_basic(self, matcher):
        assert matcher.strip_subdomains("maps.kagi.com") == "kagi.com"

    def test_multi_label_suffix(self, matcher):
        assert matcher.strip_subdomains("www.bbc.co.uk") == "bbc.co.uk"

    def test_only_multi_label_suffix_known(self):
        """Test a two-label suffix matches without its single-label parent."""
        matcher = seeded_matcher(suffixes={"co.uk"})
        assert matcher.strip_subdomains("www.bbc.co.uk") == "bbc.co.uk"

    def test_longest_suffix_wins(self, matcher):
        """Test overlapping suffixes resolve to the most specific one."""
        assert matcher.strip_subdomains("a.b.user.github.io") == "user.github.io"

    def test_already_registrable(self, matcher):
        assert matcher.strip_subdomains("kagi.com") == "kagi.com"

    def test_idempotent(self, matcher):
        for host in ("maps.kagi.com", "x.y.bbc.co.uk", "a.user.github.io"):
            once = matcher.strip_subdomains(host)
            assert matcher.strip_subdomains(once) == once

    def test_lowercases(self, matcher):
        assert matcher.strip_subdomains("Maps.KAGI.Com") == "kagi.com"

    def test_no_known_suffix(self, matcher):
        assert matcher.strip_subdomains("localhost") == "localhost"
        assert matcher.strip_subdomains("Intranet.Corp") == "intranet.corp"

    def test_hostname_is_suffix(self, matcher):
        """Test a hostname that is itself a suffix is returned whole."""
        assert matcher.strip_subdomains("co.uk") == "co.uk"
        assert matcher.strip_subdomains("com") == "com"

    def test_empty_hostname(self, matcher):
        assert matcher.strip_subdomains("") == ""


class TestStripSuffix:
    """Test suite for DomainMatcher.strip_suffix."""

    @pytest.fixture
    def matcher(self):
        return seeded_matcher(suffixes={"com", "co.uk", "uk"})

    def test_basic(self, matcher):
        assert matcher.strip_suffix("maps.kagi.com") == "maps.kagi"

    def test_longest_suffix_removed(self, matcher):
        """Test 'co.uk' is removed rather than just 'uk'."""
        assert matcher.strip_suffix("www.bbc.co.uk") == "www.bbc"

    def test_hostname_is_suffix(self, matcher):
        assert matcher.strip_suffix("co.uk") == ""

    def test_no_known_suffix(self, matcher):
        assert matcher.strip_suffix("LocalHost") == "localhost"

    def test_reconstruction(self, matcher):
        """Test the stripped part and the suffix rebuild the hostname."""
        for host in ("maps.kagi.com", "www.bbc.co.uk", "Shop.Example.UK"):
            suffix = matcher.find_suffix(host)
            assert f"{matcher.strip_suffix(host)}.{suffix}" == host.lower()


class TestTldOnly:
    """Test suite for matching against IANA TLDs."""

    @pytest.fixture
    def matcher(self):
        return seeded_matcher(
            suffixes={"com", "co.uk", "uk"}, tld_extensions={"com", "uk"}
        )

    def test_tld_only_ignores_public_suffixes(self, matcher):
        """Test 'co.uk' is treated as a domain when only TLDs count."""
        assert matcher.strip_subdomains("site.co.uk", tld_only=True) == "co.uk"
        assert matcher.strip_suffix("site.co.uk", tld_only=True) == "site.co"

    def test_default_uses_public_suffixes(self, matcher):
        assert matcher.strip_subdomains("site.co.uk") == "site.co.uk"
        assert matcher.strip_suffix("site.co.uk") == "site"

    def test_tld_only_uses_selected_set(self):
        """Test TLD matching never consults the public suffix set."""
        matcher = seeded_matcher(suffixes={"co.uk"}, tld_extensions={"uk"})
        assert matcher.find_suffix("www.bbc.co.uk", tld_only=True) == "uk"
        assert matcher.find_suffix("www.bbc.co.uk") == "co.uk"


class TestSplit:
    """Test suite for DomainMatcher.split and find_suffix."""

    @pytest.fixture
    def matcher(self):
        return seeded_matcher(suffixes={"com", "co.uk", "uk"})

    def test_split(self, matcher):
        parts = matcher.split("A.Maps.Kagi.co.uk")
        assert parts == DomainParts(
            hostname="a.maps.kagi.co.uk",
            subdomain="a.maps",
            domain="kagi.co.uk",
            suffix="co.uk",
        )

    def test_split_without_subdomain(self, matcher):
        parts = matcher.split("kagi.com")
        assert parts.subdomain == ""
        assert parts.domain == "kagi.com"
        assert parts.suffix == "com"

    def test_split_unknown(self, matcher):
        parts = matcher.split("localhost")
        assert parts.domain == "localhost"
        assert parts.suffix == ""

    def test_split_suffix_only(self, matcher):
        parts = matcher.split("co.uk")
        assert parts.domain == "co.uk"
        assert parts.suffix == "co.uk"

    def test_find_suffix(self, matcher):
        assert matcher.find_suffix("www.bbc.co.uk") == "co.uk"
        assert matcher.find_suffix("localhost") is None


class TestLazyLoading:
    """Test suite for loading the suffix set on first use."""

    def make_matcher(self, outcomes, sleeper):
        config = Config()
        session = FakeSession(outcomes)
        fetcher = URLFetcher(session=session, sleep=sleeper, config=config)
        return DomainMatcher(SuffixDatabase(fetcher=fetcher, config=config)), session

    def test_loads_on_first_use(self, sleeper):
        matcher, session = self.make_matcher(
            [FakeResponse(200, SUFFIX_LIST)], sleeper
        )

        assert matcher.strip_subdomains("www.bbc.co.uk") == "bbc.co.uk"
        assert matcher.strip_suffix("maps.kagi.com") == "maps.kagi"
        assert len(session.calls) == 1

    def test_tld_only_loads_iana_database(self, sleeper):
        """Test a TLD-only lookup downloads the IANA page, not the suffix list."""
        matcher, session = self.make_matcher([FakeResponse(200, IANA_PAGE)], sleeper)

        assert matcher.strip_subdomains("www.bbc.co.uk", tld_only=True) == "co.uk"
        assert session.calls[0][0] == Config().sources.tld_url
        assert len(session.calls) == 1
        assert not matcher.database.is_loaded()

    def test_wildcard_entry_matches(self, sleeper):
        matcher, _ = self.make_matcher([FakeResponse(200, SUFFIX_LIST)], sleeper)
        assert matcher.strip_subdomains("a.b.ck") == "b.ck"

    def test_fetch_failure_propagates(self, sleeper):
        """Test a failed load raises instead of reporting no match."""
        matcher, _ = self.make_matcher([FakeResponse(503)] * 6, sleeper)

        with pytest.raises(FetchError):
            matcher.strip_subdomains("maps.kagi.com")

        assert not matcher.database.is_loaded()


class TestModuleFunctions:
    """Test suite for the module-level API backed by the global database."""

    @pytest.fixture(autouse=True)
    def seeded(self):
        get_database().seed(
            tld_extensions={"com", "uk"}, suffixes={"com", "co.uk", "uk"}
        )

    def test_strip_subdomains(self):
        assert domain_util.strip_subdomains("maps.kagi.com") == "kagi.com"
        assert domain_util.strip_subdomains("x.site.co.uk", tld_only=True) == "co.uk"

    def test_strip_suffix(self):
        assert domain_util.strip_suffix("maps.kagi.com") == "maps.kagi"

    def test_split_and_find_suffix(self):
        assert domain_util.find_suffix("www.bbc.co.uk") == "co.uk"
        assert domain_util.split("www.bbc.co.uk").domain == "bbc.co.uk"

    def test_global_matcher_follows_database(self):
        assert get_matcher().database is get_database()
