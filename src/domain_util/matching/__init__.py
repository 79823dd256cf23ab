"""
Registrable domain and suffix extraction.
"""

from .matcher import (
    DomainMatcher,
    DomainParts,
    find_suffix,
    get_matcher,
    reset_matcher,
    split,
    strip_subdomains,
    strip_suffix,
    update_suffixes,
    update_tlds,
)

__all__ = [
    "DomainMatcher",
    "DomainParts",
    "find_suffix",
    "get_matcher",
    "reset_matcher",
    "split",
    "strip_subdomains",
    "strip_suffix",
    "update_suffixes",
    "update_tlds",
]
