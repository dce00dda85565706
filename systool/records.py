"""Core data structures for DNS queries, propagation checks and bulk runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class DNSRecordType(str, Enum):
    """DNS record types the tool knows how to query."""

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    MX = "MX"
    NS = "NS"
    TXT = "TXT"
    SOA = "SOA"
    PTR = "PTR"
    SRV = "SRV"

    def __str__(self) -> str:
        return self.value


class OutputFormat(str, Enum):
    """Output formats offered by the command line."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"
    XML = "xml"

    def __str__(self) -> str:
        return self.value


class BulkOperation(str, Enum):
    """Kinds of bulk operation."""

    QUERY = "query"
    PROPAGATION = "propagation"
    CONSISTENCY = "consistency"

    def __str__(self) -> str:
        return self.value


def _nanoseconds(seconds: float) -> int:
    return round(seconds * 1_000_000_000)


def _jsonable(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, BaseException):
        return str(value)
    return value


@dataclass
class DNSRecord:
    """A single resource record from an answer section."""

    name: str
    type: DNSRecordType
    value: str
    ttl: int
    priority: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": str(self.type),
            "value": self.value,
            "ttl": self.ttl,
        }
        if self.priority:
            data["priority"] = self.priority
        return data


@dataclass
class DNSQuery:
    """The parameters of one DNS query."""

    domain: str
    record_type: DNSRecordType
    nameserver: str
    timeout: float = 5.0
    use_recursion: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "record_type": str(self.record_type),
            "nameserver": self.nameserver,
            "timeout": _nanoseconds(self.timeout),
            "use_recursion": self.use_recursion,
        }


@dataclass
class DNSResult:
    """The outcome of one DNS query; times are in seconds."""

    query: DNSQuery
    nameserver: str
    timestamp: datetime
    records: list[DNSRecord] = field(default_factory=list)
    response_time: float = 0.0
    error: BaseException | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "query": self.query.to_dict(),
            "records": [record.to_dict() for record in self.records],
            "response_time": _nanoseconds(self.response_time),
        }
        if self.error is not None:
            data["error"] = str(self.error)
        data["timestamp"] = self.timestamp.isoformat()
        data["nameserver"] = self.nameserver
        return data


@dataclass
class PropagationResult:
    """Answers from several nameservers for the same question."""

    domain: str
    record_type: DNSRecordType
    total_servers: int
    timestamp: datetime
    results: dict[str, list[DNSRecord]] = field(default_factory=dict)
    inconsistent: bool = False
    success_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "record_type": str(self.record_type),
            "results": {
                server: [record.to_dict() for record in records]
                for server, records in self.results.items()
            },
            "inconsistent": self.inconsistent,
            "total_servers": self.total_servers,
            "success_count": self.success_count,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ConsistencyIssue:
    """A DNS configuration problem; severity is low, medium or high."""

    type: str
    domain: str
    record_type: DNSRecordType
    description: str
    severity: str
    servers: list[str] = field(default_factory=list)
    expected: str = ""
    actual: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "domain": self.domain,
            "record_type": str(self.record_type),
            "description": self.description,
            "severity": self.severity,
            "servers": list(self.servers),
        }
        if self.expected:
            data["expected"] = self.expected
        if self.actual:
            data["actual"] = self.actual
        return data


@dataclass
class QueryOptions:
    """Resolver settings; the timeout is in seconds."""

    timeout: float = 5.0
    retries: int = 3
    use_recursion: bool = True
    check_dnssec: bool = False
    ipv4_only: bool = False
    ipv6_only: bool = False


@dataclass
class BulkResult:
    """The outcome of one operation on one domain within a bulk run."""

    domain: str
    success: bool
    start_time: datetime
    end_time: datetime
    error: BaseException | None = None
    data: Any = None

    @property
    def duration(self) -> float:
        """Elapsed time in seconds."""
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "Domain": self.domain,
            "Success": self.success,
            "Error": None if self.error is None else str(self.error),
            "StartTime": self.start_time.isoformat(),
            "EndTime": self.end_time.isoformat(),
            "Data": _jsonable(self.data),
        }


@dataclass
class BulkSummary:
    """Totals and per-domain results of a bulk run; duration in seconds."""

    total_domains: int
    successful: int
    failed: int
    duration: float
    results: list[BulkResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "TotalDomains": self.total_domains,
            "Successful": self.successful,
            "Failed": self.failed,
            "Duration": _nanoseconds(self.duration),
            "Results": [result.to_dict() for result in self.results],
        }