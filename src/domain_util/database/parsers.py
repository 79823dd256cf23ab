"""
Parsers for the upstream suffix databases.

- IANA root zone database: HTML page listing every TLD as `.tld`
- Mozilla public suffix list: one rule per line, `//` comments
"""

import logging
from string import punctuation
from typing import Iterable, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Anchors holding TLD labels on the IANA root zone page
TLD_SELECTOR = "span.domain.tld > a"


def parse_tld_html(body: bytes) -> frozenset[str]:
    """
    Extract top level domain extensions from the IANA root zone page.

    Each matching anchor yields exactly one token. The page renders TLDs
    with a leading dot, which is removed.

    Args:
        body: Raw HTML document

    Returns:
        Set of bare, lowercase TLDs (e.g. 'com', 'uk')
    """
    soup = BeautifulSoup(body, "html.parser")

    tlds = set()
    for anchor in soup.select(TLD_SELECTOR):
        text = anchor.get_text(strip=True)
        if text and text[0] in punctuation:
            text = text[1:]
        text = text.lower()
        if text:
            tlds.add(text)

    if not tlds:
        logger.warning(f"No TLD entries matched '{TLD_SELECTOR}' in document")

    return frozenset(tlds)


def clean_suffix(line: str) -> Optional[str]:
    """
    Normalize a single suffix rule.

    Args:
        line: Raw rule text

    Returns:
        Lowercase suffix, or None for blank lines, comments and bare wildcards
    """
    line = line.strip()
    if not line or line.startswith("/"):
        return None

    if line.startswith("*"):
        line = line[1:]
        if line.startswith("."):
            line = line[1:]
        if not line:
            return None

    return line.lower()


def clean_suffixes(lines: Iterable[str]) -> frozenset[str]:
    """Normalize rules with clean_suffix(), dropping the ones it rejects."""
    suffixes = set()
    for line in lines:
        suffix = clean_suffix(line)
        if suffix is not None:
            suffixes.add(suffix)
    return frozenset(suffixes)


def parse_suffix_list(body: bytes) -> frozenset[str]:
    """
    Extract public suffixes from the Mozilla public suffix list.

    Blank lines and lines starting with '/' are skipped. A leading
    wildcard marker ('*' or '*.') is dropped, so '*.ck' yields 'ck'.
    Every other line is kept as is.

    Args:
        body: Raw list contents (UTF-8)

    Returns:
        Set of lowercase suffixes (e.g. 'com', 'co.uk')
    """
    suffixes = clean_suffixes(body.decode("utf-8-sig").splitlines())

    if not suffixes:
        logger.warning("No entries found in public suffix list")

    return suffixes
