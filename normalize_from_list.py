#!/usr/bin/env python3
"""
Batch hostname normalization from a list.

Reads hostnames from a text file (or stdin), downloads the suffix database
once, and prints one normalized hostname per input line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

# Ensure local package imports work when running as a script
sys.path.insert(0, str(Path(__file__).parent / "src"))

from domain_util.config import get_config
from domain_util.database import SuffixDatabase
from domain_util.fetch import FetchError
from domain_util.matching import DomainMatcher

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    config = get_config()
    parser = argparse.ArgumentParser(
        description="Reduce hostnames to their registrable domain (or strip the suffix)."
    )
    parser.add_argument(
        "--host-file",
        type=Path,
        default=None,
        help="Path to a file containing hostnames (one per line, '#' comments allowed). "
        "Reads stdin when omitted.",
    )
    parser.add_argument(
        "--mode",
        choices=("domain", "strip-suffix", "suffix"),
        default="domain",
        help="domain: registrable domain; strip-suffix: labels left of the suffix; "
        "suffix: the matched suffix (default: domain).",
    )
    parser.add_argument(
        "--tld-only",
        action="store_true",
        help="Match against IANA top level domains instead of the public suffix list.",
    )
    parser.add_argument(
        "--retry-count",
        type=int,
        default=config.fetch.retry_count,
        help="Retries before giving up on a download (defaults to config).",
    )
    parser.add_argument(
        "--backoff-time",
        type=float,
        default=config.fetch.backoff_time,
        help="Initial backoff in seconds after a failed download (defaults to config).",
    )
    parser.add_argument(
        "--backoff-factor",
        type=float,
        default=config.fetch.backoff_factor,
        help="Backoff multiplier per failed download (defaults to config).",
    )
    args = parser.parse_args(argv)

    if args.retry_count < 0:
        parser.error(f"--retry-count must be >= 0, got {args.retry_count}")
    if args.backoff_time < 0:
        parser.error(f"--backoff-time must be >= 0, got {args.backoff_time}")
    if args.backoff_factor <= 1:
        parser.error(
            f"--backoff-factor must be greater than 1, got {args.backoff_factor}"
        )
    return args


def load_hostnames(lines: Iterable[str]) -> list[str]:
    """
    Collect hostnames from raw lines.

    - Ignores blank lines and comments starting with '#'
    - Takes the first whitespace-separated field of each line
    """
    hostnames: List[str] = []
    for raw_line in lines:
        entry = raw_line.strip()
        if not entry or entry.startswith("#"):
            continue
        hostnames.append(entry.split()[0])
    return hostnames


def normalize(
    hostnames: Iterable[str],
    matcher: DomainMatcher,
    mode: str,
    tld_only: bool,
    out: TextIO,
) -> int:
    """Write one normalized line per hostname. Returns the number written."""
    count = 0
    for hostname in hostnames:
        if mode == "strip-suffix":
            result: Optional[str] = matcher.strip_suffix(hostname, tld_only)
        elif mode == "suffix":
            result = matcher.find_suffix(hostname, tld_only) or ""
        else:
            result = matcher.strip_subdomains(hostname, tld_only)
        out.write(f"{result}\n")
        count += 1
    return count


def main() -> None:
    args = parse_args()

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )

    if args.host_file is not None:
        if not args.host_file.exists():
            raise FileNotFoundError(f"Host list file not found: {args.host_file}")
        hostnames = load_hostnames(args.host_file.read_text().splitlines())
    else:
        hostnames = load_hostnames(sys.stdin)
    logger.info("Hostnames to normalize: %d", len(hostnames))

    database = SuffixDatabase(config=config)
    try:
        if args.tld_only:
            database.update_tlds(args.retry_count, args.backoff_time, args.backoff_factor)
        else:
            database.update_suffixes(
                args.retry_count, args.backoff_time, args.backoff_factor
            )
    except FetchError:
        logger.exception("Could not download the suffix database")
        sys.exit(1)

    matcher = DomainMatcher(database)
    written = normalize(hostnames, matcher, args.mode, args.tld_only, sys.stdout)
    logger.info("Normalized %d hostnames", written)


if __name__ == "__main__":
    main()
