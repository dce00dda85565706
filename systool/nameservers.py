"""Well-known public DNS resolvers grouped by provider."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass


@dataclass(frozen=True)
class Nameserver:
    """A public DNS resolver."""

    name: str
    ip: ipaddress.IPv4Address | ipaddress.IPv6Address
    port: int
    provider: str


def _pair(key: str, provider: str, first: str, second: str, names: tuple[str, str] | None = None) -> list[Nameserver]:
    first_name, second_name = names or (f"{key}-dns1", f"{key}-dns2")
    return [
        Nameserver(first_name, ipaddress.ip_address(first), 53, provider),
        Nameserver(second_name, ipaddress.ip_address(second), 53, provider),
    ]


COMMON_NAMESERVERS: dict[str, list[Nameserver]] = {
    "google": _pair("google", "Google", "8.8.8.8", "8.8.4.4"),
    "cloudflare": _pair("cloudflare", "Cloudflare", "1.1.1.1", "1.0.0.1"),
    "quad9": _pair("quad9", "Quad9", "9.9.9.9", "149.112.112.112"),
    "opendns": _pair("opendns", "OpenDNS", "208.67.222.222", "208.67.220.220", ("opendns1", "opendns2")),
    "godaddy": _pair("godaddy", "GoDaddy", "173.201.71.1", "173.201.71.12"),
    "squarespace": _pair("squarespace", "Squarespace", "198.185.159.144", "198.185.159.145"),
    "namecheap": _pair("namecheap", "Namecheap", "198.54.120.19", "198.54.117.10"),
    "dyn": _pair("dyn", "Dyn", "216.146.35.35", "216.146.36.36"),
    "comodo": _pair("comodo", "Comodo", "8.26.56.26", "8.20.247.20"),
    "verisign": _pair("verisign", "Verisign", "64.6.64.6", "64.6.65.6"),
    "adguard": _pair("adguard", "AdGuard", "94.140.14.14", "94.140.15.15"),
    "cleanbrowing": _pair("cleanbrowing", "CleanBrowsing", "185.228.168.9", "185.228.169.9"),
    "alternate": _pair("alternate", "Alternate DNS", "76.76.19.19", "76.223.100.101"),
    "level3": _pair("level3", "Level3", "209.244.0.3", "209.244.0.4"),
}


def get_all_nameservers() -> list[Nameserver]:
    """Every known nameserver from every provider."""
    return [server for servers in COMMON_NAMESERVERS.values() for server in servers]


def get_provider_nameservers(provider: str) -> list[Nameserver]:
    """The nameservers of one provider, or an empty list if it is unknown."""
    return list(COMMON_NAMESERVERS.get(provider, []))


def get_default_nameservers() -> list[Nameserver]:
    """A small default set of reliable resolvers."""
    return [
        COMMON_NAMESERVERS["google"][0],
        COMMON_NAMESERVERS["cloudflare"][0],
        COMMON_NAMESERVERS["quad9"][0],
    ]