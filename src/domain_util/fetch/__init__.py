"""
Reference data download with retry.
"""

from .fetcher import FetchError, RetryPolicy, URLFetcher, fetch, get_fetcher

__all__ = [
    "FetchError",
    "RetryPolicy",
    "URLFetcher",
    "fetch",
    "get_fetcher",
]
