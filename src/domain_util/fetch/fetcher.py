"""
HTTP fetcher with exponential-backoff retry.

Downloads a reference dataset in full. Any non-200 response or transport
error is retried after a growing delay until the retry budget is spent,
at which point a FetchError is raised.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import requests

from domain_util.config import Config, get_config

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a URL could not be fetched after all retries."""

    def __init__(self, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        if status_code is None:
            reason = "transport error"
        else:
            reason = f"status_code: {status_code}"
        super().__init__(f"Could not access {url} after several retries, {reason}")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry schedule for a single fetch.

    Attributes:
        max_retries: Number of retries after the first attempt
        initial_backoff: Seconds to wait after the first failure
        backoff_factor: Multiplier applied to the wait after each failure
    """

    max_retries: int = 5
    initial_backoff: float = 0.2
    backoff_factor: float = 1.5

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.initial_backoff < 0:
            raise ValueError(
                f"initial_backoff must be >= 0, got {self.initial_backoff}"
            )
        if self.backoff_factor <= 1:
            raise ValueError(
                f"backoff_factor must be greater than 1, got {self.backoff_factor}"
            )

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        retry_count: Optional[int] = None,
        backoff_time: Optional[float] = None,
        backoff_factor: Optional[float] = None,
    ) -> "RetryPolicy":
        """
        Build a policy from configured defaults, overriding any given values.

        Args:
            config: Configuration to read defaults from (default: global config)
            retry_count: Override for the maximum number of retries
            backoff_time: Override for the initial backoff in seconds
            backoff_factor: Override for the backoff multiplier

        Returns:
            RetryPolicy instance
        """
        fetch_config = (config or get_config()).fetch
        return cls(
            max_retries=fetch_config.retry_count if retry_count is None else retry_count,
            initial_backoff=(
                fetch_config.backoff_time if backoff_time is None else backoff_time
            ),
            backoff_factor=(
                fetch_config.backoff_factor
                if backoff_factor is None
                else backoff_factor
            ),
        )

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry, in order."""
        backoff = self.initial_backoff
        for _ in range(self.max_retries):
            yield backoff
            backoff *= self.backoff_factor


class URLFetcher:
    """
    Blocking HTTP GET with retry.

    Usage:
        fetcher = URLFetcher()
        body = fetcher.fetch("https://publicsuffix.org/list/public_suffix_list.dat")
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        config: Optional[Config] = None,
    ):
        """
        Initialize fetcher.

        Args:
            session: HTTP session to issue requests with (default: new Session)
            sleep: Function used to wait between attempts
            config: Configuration (default: global config)
        """
        self.config = config or get_config()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.fetch.user_agent})
        self._sleep = sleep

    def fetch(self, url: str, policy: Optional[RetryPolicy] = None) -> bytes:
        """
        Download a URL, retrying with exponential backoff.

        Args:
            url: URL to GET
            policy: Retry schedule (default: from config)

        Returns:
            Full response body

        Raises:
            FetchError: If every attempt failed
        """
        policy = policy or RetryPolicy.from_config(self.config)

        attempts_left = policy.max_retries
        backoff = policy.initial_backoff

        logger.info(f"Downloading from {url}...")
        while True:
            status_code = None
            error: Optional[requests.RequestException] = None
            try:
                response = self.session.get(
                    url, timeout=self.config.fetch.request_timeout
                )
                status_code = response.status_code
                if status_code == 200:
                    return response.content
                reason = f"returned a non-200 status code ({status_code})"
            except requests.RequestException as e:
                error = e
                reason = f"failed with {type(e).__name__}: {e}"

            if attempts_left <= 0:
                raise FetchError(url, status_code) from error

            logger.warning(f"{url} {reason}, retrying in {backoff:.3f}s")
            self._sleep(backoff)
            attempts_left -= 1
            backoff *= policy.backoff_factor


# Global fetcher instance
_fetcher: Optional[URLFetcher] = None


def get_fetcher() -> URLFetcher:
    """Get or create the global fetcher instance."""
    global _fetcher
    if _fetcher is None:
        _fetcher = URLFetcher()
    return _fetcher


def fetch(url: str, policy: Optional[RetryPolicy] = None) -> bytes:
    """Download a URL using the global fetcher."""
    return get_fetcher().fetch(url, policy)
