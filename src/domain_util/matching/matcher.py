"""
Hostname matching against the suffix database.

Finds the longest known suffix of a hostname by scanning its labels from
the most specific one outward, then splits the hostname around it:

    maps.kagi.co.uk  ->  subdomain='maps', domain='kagi.co.uk', suffix='co.uk'
"""

from dataclasses import dataclass
from typing import Optional

from domain_util.database import SuffixDatabase, get_database


@dataclass(frozen=True)
class DomainParts:
    """
    A hostname split around its matched suffix.

    Attributes:
        hostname: Lowercased hostname
        subdomain: Labels left of the registrable domain ('' if none)
        domain: Registrable domain (suffix plus one label)
        suffix: Matched public suffix ('' if no suffix was recognized)
    """

    hostname: str
    subdomain: str
    domain: str
    suffix: str


class DomainMatcher:
    """
    Longest-match suffix lookup over dot-separated labels.

    Usage:
        matcher = DomainMatcher()
        matcher.strip_subdomains("maps.kagi.com")  # kagi.com
        matcher.strip_suffix("maps.kagi.com")      # maps.kagi
    """

    def __init__(self, database: Optional[SuffixDatabase] = None):
        """
        Initialize matcher.

        Args:
            database: Suffix database to match against (default: global database)
        """
        self.database = database or get_database()

    def _match(self, hostname: str, tld_only: bool) -> tuple[list[str], Optional[int]]:
        """
        Locate the longest known suffix.

        Returns:
            Tuple of (labels, index of first suffix label or None)
        """
        known = self.database.ensure_loaded(tld_only)
        tokens = hostname.lower().split(".")

        # Ascending index means longest candidate first
        for i in range(len(tokens)):
            if ".".join(tokens[i:]) in known:
                return tokens, i
        return tokens, None

    def strip_subdomains(self, hostname: str, tld_only: bool = False) -> str:
        """
        Extract the registrable domain from a hostname.

        The matched suffix and the label immediately to its left are kept;
        any further subdomains are dropped. With tld_only=True only IANA
        TLDs count as suffixes, so 'site.co.uk' yields 'co.uk'.

        Args:
            hostname: Hostname to reduce
            tld_only: Match against IANA TLDs instead of the public suffix list

        Returns:
            Registrable domain, or the lowercased hostname if no suffix matched
            or the hostname is itself a suffix

        Raises:
            FetchError: If the suffix set had to be downloaded and could not be
        """
        tokens, i = self._match(hostname, tld_only)
        if i is None or i == 0:
            return ".".join(tokens)
        return ".".join(tokens[i - 1 :])

    def strip_suffix(self, hostname: str, tld_only: bool = False) -> str:
        """
        Remove the domain suffix from the end of a hostname.

        Follows the same options and semantics as strip_subdomains().

        Returns:
            Labels left of the suffix, '' if the hostname is itself a suffix,
            or the lowercased hostname if no suffix matched
        """
        tokens, i = self._match(hostname, tld_only)
        if i is None:
            return ".".join(tokens)
        return ".".join(tokens[:i])

    def find_suffix(self, hostname: str, tld_only: bool = False) -> Optional[str]:
        """Return the longest known suffix of a hostname, or None."""
        tokens, i = self._match(hostname, tld_only)
        if i is None:
            return None
        return ".".join(tokens[i:])

    def split(self, hostname: str, tld_only: bool = False) -> DomainParts:
        """
        Split a hostname into subdomain, registrable domain and suffix.

        Args:
            hostname: Hostname to split
            tld_only: Match against IANA TLDs instead of the public suffix list

        Returns:
            DomainParts for the hostname
        """
        tokens, i = self._match(hostname, tld_only)
        host = ".".join(tokens)

        if i is None:
            return DomainParts(hostname=host, subdomain="", domain=host, suffix="")
        if i == 0:
            return DomainParts(hostname=host, subdomain="", domain=host, suffix=host)

        return DomainParts(
            hostname=host,
            subdomain=".".join(tokens[: i - 1]),
            domain=".".join(tokens[i - 1 :]),
            suffix=".".join(tokens[i:]),
        )


# Global matcher instance
_matcher: Optional[DomainMatcher] = None


def get_matcher() -> DomainMatcher:
    """Get or create the global matcher bound to the global database."""
    global _matcher
    if _matcher is None or _matcher.database is not get_database():
        _matcher = DomainMatcher(get_database())
    return _matcher


def reset_matcher() -> None:
    """Reset the global matcher (for testing)."""
    global _matcher
    _matcher = None


def update_tlds(
    retry_count: Optional[int] = None,
    backoff_time: Optional[float] = None,
    backoff_factor: Optional[float] = None,
) -> frozenset[str]:
    """Refresh the global IANA TLD set. See SuffixDatabase.update_tlds()."""
    return get_database().update_tlds(retry_count, backoff_time, backoff_factor)


def update_suffixes(
    retry_count: Optional[int] = None,
    backoff_time: Optional[float] = None,
    backoff_factor: Optional[float] = None,
) -> frozenset[str]:
    """Refresh the global public suffix set. See SuffixDatabase.update_suffixes()."""
    return get_database().update_suffixes(retry_count, backoff_time, backoff_factor)


def strip_subdomains(hostname: str, tld_only: bool = False) -> str:
    """Extract the registrable domain using the global database."""
    return get_matcher().strip_subdomains(hostname, tld_only)


def strip_suffix(hostname: str, tld_only: bool = False) -> str:
    """Remove the domain suffix using the global database."""
    return get_matcher().strip_suffix(hostname, tld_only)


def find_suffix(hostname: str, tld_only: bool = False) -> Optional[str]:
    """Return the longest known suffix using the global database."""
    return get_matcher().find_suffix(hostname, tld_only)


def split(hostname: str, tld_only: bool = False) -> DomainParts:
    """Split a hostname using the global database."""
    return get_matcher().split(hostname, tld_only)
