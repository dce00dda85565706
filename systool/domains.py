"""Reading and validating lists of domain names."""

from __future__ import annotations

import os
import string

_MAX_DOMAIN_LENGTH = 253
_ALLOWED_CHARACTERS = frozenset(string.ascii_letters + string.digits + ".-")


def is_valid_domain(domain: str) -> bool:
    """A basic plausibility check of a domain name."""
    if not domain or len(domain) > _MAX_DOMAIN_LENGTH:
        return False
    if not set(domain) <= _ALLOWED_CHARACTERS:
        return False
    if "." not in domain:
        return False
    if domain[0] in ".-" or domain[-1] in ".-":
        return False
    return True


def read_domains_from_file(filename: str | os.PathLike[str]) -> list[str]:
    """Domains listed one per line; blank lines and # comments are skipped.

    Raises OSError if the file cannot be read and ValueError if a line holds
    an invalid domain or the file lists no domains at all.
    """
    domains: list[str] = []
    with open(filename, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            domain = line.strip()
            if not domain or domain.startswith("#"):
                continue
            if not is_valid_domain(domain):
                raise ValueError(f"invalid domain on line {line_number}: {domain}")
            domains.append(domain)

    if not domains:
        raise ValueError("no valid domains found in file")
    return domains