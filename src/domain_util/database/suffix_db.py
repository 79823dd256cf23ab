"""
In-memory suffix database with lazy loading.

Holds the two suffix sets used for matching:
- tld_extensions: IANA top level domains (com, net, uk, ...)
- suffixes: Mozilla public suffixes (com, co.uk, github.io, ...), a superset
  of tld_extensions that also holds multi-label registrable suffixes

Sets start empty and are loaded on first use. A set is replaced as a whole
on a successful update; a failed download leaves the current set in place.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from domain_util.config import Config, get_config
from domain_util.fetch import RetryPolicy, URLFetcher

from .parsers import clean_suffixes, parse_suffix_list, parse_tld_html

logger = logging.getLogger(__name__)

EMPTY: frozenset[str] = frozenset()


class SuffixDatabase:
    """
    Process-wide cache of the TLD and public suffix sets.

    Loading is guarded by a lock so that concurrent callers never trigger
    duplicate downloads of the same set.

    Usage:
        db = SuffixDatabase()
        db.update_suffixes()
        "co.uk" in db.suffixes  # True
    """

    def __init__(
        self,
        fetcher: Optional[URLFetcher] = None,
        config: Optional[Config] = None,
    ):
        """
        Initialize an empty database.

        Args:
            fetcher: Fetcher used to download upstream data (default: new URLFetcher)
            config: Configuration (default: global config)
        """
        self.config = config or get_config()
        self.fetcher = fetcher or URLFetcher(config=self.config)

        self._tld_extensions: frozenset[str] = EMPTY
        self._suffixes: frozenset[str] = EMPTY
        self._lock = threading.RLock()

    @property
    def tld_extensions(self) -> frozenset[str]:
        """IANA top level domain extensions (empty until loaded)."""
        return self._tld_extensions

    @property
    def suffixes(self) -> frozenset[str]:
        """Mozilla public suffixes (empty until loaded)."""
        return self._suffixes

    def update_tlds(
        self,
        retry_count: Optional[int] = None,
        backoff_time: Optional[float] = None,
        backoff_factor: Optional[float] = None,
    ) -> frozenset[str]:
        """
        Download and parse the IANA TLD database.

        Args:
            retry_count: Maximum number of retries (default: from config)
            backoff_time: Initial wait in seconds after a failure (default: from config)
            backoff_factor: Wait multiplier per failure, > 1 (default: from config)

        Returns:
            The newly loaded set

        Raises:
            FetchError: If the download failed after all retries
        """
        policy = RetryPolicy.from_config(
            self.config, retry_count, backoff_time, backoff_factor
        )
        url = self.config.sources.tld_url

        logger.info("Downloading TLD database from IANA...")
        with self._lock:
            tlds = self._load(url, policy, parse_tld_html)
            self._tld_extensions = tlds

        logger.info(
            f"Successfully loaded {len(tlds)} top level domain extensions from IANA"
        )
        return tlds

    def update_suffixes(
        self,
        retry_count: Optional[int] = None,
        backoff_time: Optional[float] = None,
        backoff_factor: Optional[float] = None,
    ) -> frozenset[str]:
        """
        Download and parse the Mozilla public suffix list.

        Args:
            retry_count: Maximum number of retries (default: from config)
            backoff_time: Initial wait in seconds after a failure (default: from config)
            backoff_factor: Wait multiplier per failure, > 1 (default: from config)

        Returns:
            The newly loaded set

        Raises:
            FetchError: If the download failed after all retries
        """
        policy = RetryPolicy.from_config(
            self.config, retry_count, backoff_time, backoff_factor
        )
        url = self.config.sources.suffix_url

        logger.info("Downloading public suffix database from mozilla...")
        with self._lock:
            suffixes = self._load(url, policy, parse_suffix_list)
            self._suffixes = suffixes

        logger.info(f"Successfully loaded {len(suffixes)} domain suffixes from mozilla")
        return suffixes

    def _load(
        self,
        url: str,
        policy: RetryPolicy,
        parse: Callable[[bytes], frozenset[str]],
    ) -> frozenset[str]:
        body = self.fetcher.fetch(url, policy)
        return parse(body)

    def get(self, tld_only: bool = False) -> frozenset[str]:
        """Return the selected set without loading it."""
        return self._tld_extensions if tld_only else self._suffixes

    def is_loaded(self, tld_only: bool = False) -> bool:
        """Check whether the selected set has been populated."""
        return bool(self.get(tld_only))

    def ensure_loaded(self, tld_only: bool = False) -> frozenset[str]:
        """
        Return the selected set, downloading it first if it is empty.

        Args:
            tld_only: Select the IANA TLD set instead of the public suffix list

        Returns:
            The selected set

        Raises:
            FetchError: If the set was empty and could not be downloaded
        """
        current = self.get(tld_only)
        if current:
            return current

        with self._lock:
            # Another thread may have finished loading while we waited
            current = self.get(tld_only)
            if current:
                return current
            if tld_only:
                return self.update_tlds()
            return self.update_suffixes()

    def seed(
        self,
        tld_extensions: Optional[Iterable[str]] = None,
        suffixes: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Install pre-built sets instead of downloading them.

        Entries are cleaned like public suffix list rules: blanks and comments
        are dropped, wildcard markers removed and the rest lowercased. Sets
        that are not given are left unchanged.
        """
        with self._lock:
            if tld_extensions is not None:
                self._tld_extensions = clean_suffixes(tld_extensions)
            if suffixes is not None:
                self._suffixes = clean_suffixes(suffixes)

    def clear(self) -> None:
        """Empty both sets so the next lookup downloads them again."""
        with self._lock:
            self._tld_extensions = EMPTY
            self._suffixes = EMPTY


# Global database instance
_database: Optional[SuffixDatabase] = None


def get_database() -> SuffixDatabase:
    """Get or create the global suffix database."""
    global _database
    if _database is None:
        _database = SuffixDatabase()
    return _database


def reset_database() -> None:
    """Reset the global suffix database (mainly for testing)."""
    global _database
    _database = None
