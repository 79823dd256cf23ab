"""
Suffix database loading and caching.
"""

from .parsers import clean_suffix, clean_suffixes, parse_suffix_list, parse_tld_html
from .suffix_db import SuffixDatabase, get_database, reset_database

__all__ = [
    "SuffixDatabase",
    "get_database",
    "reset_database",
    "clean_suffix",
    "clean_suffixes",
    "parse_suffix_list",
    "parse_tld_html",
]
