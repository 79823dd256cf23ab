"""
Example: Basic Usage

Demonstrates registrable domain extraction with the module-level API.
The suffix databases are downloaded on first use.

```bash
uv run python examples/basic_usage.py
```
"""

import logging

import domain_util

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

HOSTNAMES = [
    "maps.kagi.com",
    "www.bbc.co.uk",
    "user.github.io",
    "Docs.Python.ORG",
    "localhost",
]


def main():
    """Print domain parts for a few sample hostnames."""
    print("=" * 80)
    print("Public suffix list")
    print("=" * 80)
    for hostname in HOSTNAMES:
        parts = domain_util.split(hostname)
        print(
            f"{hostname:<20} domain={parts.domain:<16} "
            f"subdomain={parts.subdomain:<8} suffix={parts.suffix}"
        )

    print()
    print("=" * 80)
    print("IANA top level domains only")
    print("=" * 80)
    for hostname in HOSTNAMES:
        print(
            f"{hostname:<20} domain={domain_util.strip_subdomains(hostname, tld_only=True):<16} "
            f"stripped={domain_util.strip_suffix(hostname, tld_only=True)}"
        )


if __name__ == "__main__":
    main()
