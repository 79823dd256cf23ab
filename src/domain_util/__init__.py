"""
Registrable domain extraction backed by the IANA and Mozilla suffix databases.
"""

from .database import SuffixDatabase, get_database, reset_database
from .fetch import FetchError, RetryPolicy, URLFetcher
from .matching import (
    DomainMatcher,
    DomainParts,
    find_suffix,
    split,
    strip_subdomains,
    strip_suffix,
    update_suffixes,
    update_tlds,
)

__all__ = [
    "DomainMatcher",
    "DomainParts",
    "FetchError",
    "RetryPolicy",
    "SuffixDatabase",
    "URLFetcher",
    "find_suffix",
    "get_database",
    "reset_database",
    "split",
    "strip_subdomains",
    "strip_suffix",
    "update_suffixes",
    "update_tlds",
]
