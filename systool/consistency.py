"""DNS consistency and configuration checks across several nameservers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from systool.records import ConsistencyIssue, DNSRecordType, PropagationResult
from systool.resolver import DNSQueryError

CHECKED_RECORD_TYPES = (
    DNSRecordType.A,
    DNSRecordType.AAAA,
    DNSRecordType.MX,
    DNSRecordType.NS,
    DNSRecordType.TXT,
)

_MAX_TXT_LENGTH = 255
_MAX_SPF_LOOKUPS = 10
_SPF_LOOKUP_MECHANISMS = ("include:", "a:", "mx:", "exists:")


class _PropagationSource(Protocol):
    def check_propagation(
        self, domain: str, record_type: DNSRecordType | str, nameservers: Iterable[str]
    ) -> PropagationResult: ...


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def determine_severity(record_type: DNSRecordType | str) -> str:
    """How serious an inconsistency in records of this type is."""
    if record_type in (DNSRecordType.A, DNSRecordType.AAAA):
        return "high"
    if record_type in (DNSRecordType.MX, DNSRecordType.NS):
        return "medium"
    return "low"


def validate_spf_record(domain: str, spf_record: str, server: str) -> list[ConsistencyIssue]:
    """Problems with the syntax and size of an SPF record."""
    issues = []

    if spf_record.count("v=spf1") > 1:
        issues.append(
            ConsistencyIssue(
                type="multiple_spf_records",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="Multiple SPF records detected, which can cause email delivery issues",
                severity="high",
                servers=[server],
                actual=spf_record,
            )
        )

    length = _byte_length(spf_record)
    if length > _MAX_TXT_LENGTH:
        issues.append(
            ConsistencyIssue(
                type="spf_record_too_long",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="SPF record is too long and may be truncated",
                severity="medium",
                servers=[server],
                actual=f"Length: {length}",
            )
        )

    lookups = sum(spf_record.count(mechanism) for mechanism in _SPF_LOOKUP_MECHANISMS)
    if lookups > _MAX_SPF_LOOKUPS:
        issues.append(
            ConsistencyIssue(
                type="spf_too_many_lookups",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="SPF record exceeds the 10 DNS lookup limit",
                severity="high",
                servers=[server],
                actual=f"Lookups: {lookups}",
                expected="10 or fewer",
            )
        )

    return issues


def validate_dmarc_record(domain: str, dmarc_record: str, server: str) -> list[ConsistencyIssue]:
    """Problems with the policy of a DMARC record."""
    issues = []

    if "p=" not in dmarc_record:
        issues.append(
            ConsistencyIssue(
                type="dmarc_missing_policy",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="DMARC record is missing required policy (p=) tag",
                severity="high",
                servers=[server],
                actual=dmarc_record,
            )
        )

    if "p=none" in dmarc_record:
        issues.append(
            ConsistencyIssue(
                type="dmarc_weak_policy",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="DMARC policy is set to 'none', providing no protection",
                severity="medium",
                servers=[server],
                actual="p=none",
                expected="p=quarantine or p=reject",
            )
        )

    return issues


def validate_dkim_record(domain: str, dkim_record: str, server: str) -> list[ConsistencyIssue]:
    """Problems with the public key of a DKIM record."""
    issues = []

    if "p=" not in dkim_record:
        issues.append(
            ConsistencyIssue(
                type="dkim_missing_public_key",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="DKIM record is missing public key (p=) tag",
                severity="high",
                servers=[server],
                actual=dkim_record,
            )
        )

    if "p=;" in dkim_record or 'p="";' in dkim_record:
        issues.append(
            ConsistencyIssue(
                type="dkim_revoked_key",
                domain=domain,
                record_type=DNSRecordType.TXT,
                description="DKIM key appears to be revoked (empty public key)",
                severity="medium",
                servers=[server],
                actual="Empty public key",
            )
        )

    return issues


def _mx_issues(propagation: PropagationResult) -> list[ConsistencyIssue]:
    return [
        ConsistencyIssue(
            type="mx_priority_zero",
            domain=propagation.domain,
            record_type=DNSRecordType.MX,
            description="MX record has priority 0, which may cause mail delivery issues",
            severity="medium",
            servers=[server],
            actual=f"Priority: {record.priority}",
        )
        for server, records in propagation.results.items()
        for record in records
        if record.priority == 0
    ]


def _ns_issues(propagation: PropagationResult) -> list[ConsistencyIssue]:
    return [
        ConsistencyIssue(
            type="insufficient_nameservers",
            domain=propagation.domain,
            record_type=DNSRecordType.NS,
            description="Domain has fewer than 2 nameservers, which may cause reliability issues",
            severity="high",
            servers=[server],
            actual=f"Count: {len(records)}",
        )
        for server, records in propagation.results.items()
        if len(records) < 2
    ]


def _txt_issues(propagation: PropagationResult) -> list[ConsistencyIssue]:
    issues = []
    domain = propagation.domain
    for server, records in propagation.results.items():
        for record in records:
            length = _byte_length(record.value)
            if length > _MAX_TXT_LENGTH:
                issues.append(
                    ConsistencyIssue(
                        type="txt_record_too_long",
                        domain=domain,
                        record_type=DNSRecordType.TXT,
                        description="TXT record exceeds recommended length of 255 characters",
                        severity="low",
                        servers=[server],
                        actual=f"Length: {length}",
                    )
                )
            if record.value.startswith("v=spf1"):
                issues.extend(validate_spf_record(domain, record.value, server))
            if record.value.startswith("v=DMARC1"):
                issues.extend(validate_dmarc_record(domain, record.value, server))
            if "_domainkey" in record.name:
                issues.extend(validate_dkim_record(domain, record.value, server))
    return issues


def check_specific_issues(
    propagation: PropagationResult, record_type: DNSRecordType | str
) -> list[ConsistencyIssue]:
    """Configuration problems particular to MX, NS and TXT records."""
    if record_type == DNSRecordType.MX:
        return _mx_issues(propagation)
    if record_type == DNSRecordType.NS:
        return _ns_issues(propagation)
    if record_type == DNSRecordType.TXT:
        return _txt_issues(propagation)
    return []


class ConsistencyChecker:
    """Looks for inconsistencies and misconfigurations in a domain's records."""

    def __init__(self, resolver: _PropagationSource) -> None:
        self.resolver = resolver

    def check_consistency(self, domain: str, nameservers: Iterable[str]) -> list[ConsistencyIssue]:
        """Check the common record types of domain across the given nameservers."""
        servers = list(nameservers)
        issues: list[ConsistencyIssue] = []
        for record_type in CHECKED_RECORD_TYPES:
            try:
                propagation = self.resolver.check_propagation(domain, record_type, servers)
            except (DNSQueryError, OSError):
                continue

            if propagation.inconsistent:
                issues.append(
                    ConsistencyIssue(
                        type="propagation_inconsistency",
                        domain=domain,
                        record_type=record_type,
                        description=f"{record_type} records are inconsistent across nameservers",
                        severity=determine_severity(record_type),
                        servers=list(propagation.results),
                    )
                )

            issues.extend(check_specific_issues(propagation, record_type))
        return issues