"""DNSSEC presence and chain-of-trust checks."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone

import dns.exception
import dns.message
import dns.query
import dns.rdatatype

_QUERY_TIMEOUT = 2.0
_EDNS_PAYLOAD = 4096
_ZONE_KEY_FLAG = 256


class DNSSECValidationError(Exception):
    """Raised when the chain of trust of a domain does not hold."""


@dataclass
class DSRecord:
    """A delegation signer record; the digest is upper-case hex."""

    key_tag: int
    algorithm: int
    digest_type: int
    digest: str


@dataclass
class DNSKEYRecord:
    """A DNSKEY record; the public key is base64 text."""

    flags: int
    protocol: int
    algorithm: int
    public_key: str


@dataclass
class RRSIGRecord:
    """An RRSIG record; the signature is base64 text."""

    type_covered: int
    algorithm: int
    labels: int
    ttl: int
    expiration: datetime
    inception: datetime
    key_tag: int
    signer_name: str
    signature: str


def _now() -> datetime:
    return datetime.now(timezone.utc).astimezone()


@dataclass
class ValidationResult:
    """What a DNSSEC check found for one domain."""

    domain: str
    has_dnssec: bool = False
    is_signed: bool = False
    is_valid: bool = False
    validation_errors: list[str] = field(default_factory=list)
    ds: DSRecord | None = None
    dnskey: list[DNSKEYRecord] = field(default_factory=list)
    rrsig: list[RRSIGRecord] = field(default_factory=list)
    timestamp: datetime = field(default_factory=_now)


def get_parent_zone(domain: str) -> str:
    """The fully qualified parent of domain, or "" for a single label."""
    labels = [label for label in domain.split(".") if label]
    if len(labels) <= 1:
        return ""
    return ".".join(labels[1:]) + "."


def _fqdn(domain: str) -> str:
    return domain if domain.endswith(".") else domain + "."


def _answers(domain: str, rdtype: dns.rdatatype.RdataType, nameserver: str):
    query = dns.message.make_query(_fqdn(domain), rdtype, want_dnssec=True, payload=_EDNS_PAYLOAD)
    response = dns.query.udp(query, nameserver, port=53, timeout=_QUERY_TIMEOUT)
    for rrset in response.answer:
        if rrset.rdtype == rdtype:
            yield from rrset


def _from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, timezone.utc).astimezone()


def _query_ds(domain: str, nameserver: str) -> DSRecord | None:
    for rdata in _answers(domain, dns.rdatatype.DS, nameserver):
        return DSRecord(
            key_tag=int(rdata.key_tag),
            algorithm=int(rdata.algorithm),
            digest_type=int(rdata.digest_type),
            digest=rdata.digest.hex().upper(),
        )
    return None


def _query_dnskey(domain: str, nameserver: str) -> list[DNSKEYRecord]:
    return [
        DNSKEYRecord(
            flags=int(rdata.flags),
            protocol=int(rdata.protocol),
            algorithm=int(rdata.algorithm),
            public_key=base64.b64encode(rdata.key).decode("ascii"),
        )
        for rdata in _answers(domain, dns.rdatatype.DNSKEY, nameserver)
    ]


def _query_rrsig(domain: str, nameserver: str) -> list[RRSIGRecord]:
    return [
        RRSIGRecord(
            type_covered=int(rdata.type_covered),
            algorithm=int(rdata.algorithm),
            labels=int(rdata.labels),
            ttl=int(rdata.original_ttl),
            expiration=_from_epoch(rdata.expiration),
            inception=_from_epoch(rdata.inception),
            key_tag=int(rdata.key_tag),
            signer_name=rdata.signer.to_text(),
            signature=base64.b64encode(rdata.signature).decode("ascii"),
        )
        for rdata in _answers(domain, dns.rdatatype.RRSIG, nameserver)
    ]


def validate_chain_of_trust(result: ValidationResult, now: datetime | None = None) -> bool:
    """Check the records gathered in result; raise DNSSECValidationError if they fail."""
    if result.ds is None:
        raise DNSSECValidationError("no DS record found")
    if not result.dnskey:
        raise DNSSECValidationError("no DNSKEY records found")
    if not result.rrsig:
        raise DNSSECValidationError("no RRSIG records found")
    if not any(key.flags & _ZONE_KEY_FLAG for key in result.dnskey):
        raise DNSSECValidationError("no valid zone signing key found")
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    for sig in result.rrsig:
        if now > sig.expiration or now < sig.inception:
            raise DNSSECValidationError("RRSIG timing validation failed")
    return True


_QUERY_ERRORS = (dns.exception.DNSException, OSError)


def verify_dnssec(domain: str, nameserver: str) -> ValidationResult:
    """Query DS, DNSKEY and RRSIG records for domain and judge its DNSSEC state."""
    result = ValidationResult(domain=domain)

    if get_parent_zone(domain):
        try:
            ds = _query_ds(domain, nameserver)
        except _QUERY_ERRORS as exc:
            result.validation_errors.append(f"Error querying DS records: {exc}")
        else:
            if ds is not None:
                result.has_dnssec = True
                result.ds = ds

    try:
        result.dnskey = _query_dnskey(domain, nameserver)
    except _QUERY_ERRORS as exc:
        result.validation_errors.append(f"Error querying DNSKEY records: {exc}")
    else:
        result.is_signed = bool(result.dnskey)

    try:
        result.rrsig = _query_rrsig(domain, nameserver)
    except _QUERY_ERRORS as exc:
        result.validation_errors.append(f"Error querying RRSIG records: {exc}")

    if result.has_dnssec and result.is_signed:
        try:
            result.is_valid = validate_chain_of_trust(result)
        except DNSSECValidationError as exc:
            result.validation_errors.append(f"Chain of trust validation error: {exc}")
            result.is_valid = False

    return result