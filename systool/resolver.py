"""DNS queries against explicit nameservers and propagation checks."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import dns.exception
import dns.flags
import dns.message
import dns.query
import dns.rdataclass
import dns.rdatatype

from systool.records import (
    DNSQuery,
    DNSRecord,
    DNSRecordType,
    DNSResult,
    PropagationResult,
    QueryOptions,
)

_EDNS_PAYLOAD = 4096
_DEFAULT_PORT = 53
_RETRY_STEP = 0.5
_QUERY_ERRORS = (dns.exception.DNSException, OSError, ValueError)

_TYPE_CODES = {
    DNSRecordType.A: dns.rdatatype.A,
    DNSRecordType.AAAA: dns.rdatatype.AAAA,
    DNSRecordType.CNAME: dns.rdatatype.CNAME,
    DNSRecordType.MX: dns.rdatatype.MX,
    DNSRecordType.NS: dns.rdatatype.NS,
    DNSRecordType.TXT: dns.rdatatype.TXT,
    DNSRecordType.SOA: dns.rdatatype.SOA,
    DNSRecordType.PTR: dns.rdatatype.PTR,
    DNSRecordType.SRV: dns.rdatatype.SRV,
}


class DNSQueryError(Exception):
    """Raised when a query gets no usable response; carries the partial result."""

    def __init__(self, message: str, result: DNSResult) -> None:
        super().__init__(message)
        self.result = result


def record_type_code(record_type: DNSRecordType | str) -> dns.rdatatype.RdataType:
    """The wire type for a record type; unknown types fall back to A."""
    try:
        key = DNSRecordType(str(record_type).upper())
    except ValueError:
        return dns.rdatatype.A
    return _TYPE_CODES.get(key, dns.rdatatype.A)


def _value_of(rrset, rdata) -> tuple[str, int]:
    rdtype = rdata.rdtype
    if rdtype in (dns.rdatatype.A, dns.rdatatype.AAAA):
        return str(rdata.address), 0
    if rdtype in (dns.rdatatype.CNAME, dns.rdatatype.NS, dns.rdatatype.PTR):
        return rdata.target.to_text(), 0
    if rdtype == dns.rdatatype.MX:
        return rdata.exchange.to_text(), int(rdata.preference)
    if rdtype == dns.rdatatype.TXT:
        return " ".join(part.decode("utf-8", "replace") for part in rdata.strings), 0
    if rdtype == dns.rdatatype.SOA:
        return (
            f"{rdata.mname.to_text()} {rdata.rname.to_text()} {rdata.serial} "
            f"{rdata.refresh} {rdata.retry} {rdata.expire} {rdata.minimum}"
        ), 0
    if rdtype == dns.rdatatype.SRV:
        return rdata.target.to_text(), int(rdata.priority)
    text = "\t".join(
        [
            rrset.name.to_text(),
            str(rrset.ttl),
            dns.rdataclass.to_text(rrset.rdclass),
            dns.rdatatype.to_text(rdtype),
            rdata.to_text(),
        ]
    )
    return text, 0


def parse_response(response: dns.message.Message, record_type: DNSRecordType | str) -> list[DNSRecord]:
    """Turn the answer section of a response into records of the queried type."""
    records = []
    for rrset in response.answer:
        for rdata in rrset:
            value, priority = _value_of(rrset, rdata)
            records.append(
                DNSRecord(
                    name=rrset.name.to_text(),
                    type=record_type,
                    value=value,
                    ttl=int(rrset.ttl),
                    priority=priority,
                )
            )
    return records


def check_inconsistency(results: Mapping[str, Iterable[DNSRecord]]) -> bool:
    """True when the servers disagree on the set of record values."""
    if len(results) < 2:
        return False
    value_sets = {frozenset(record.value for record in records) for records in results.values()}
    return len(value_sets) > 1


def _fqdn(domain: str) -> str:
    return domain if domain.endswith(".") else domain + "."


def _split_nameserver(nameserver: str) -> tuple[str, int]:
    if nameserver.startswith("["):
        host, _, rest = nameserver[1:].partition("]")
        return host, int(rest[1:]) if rest.startswith(":") else _DEFAULT_PORT
    if nameserver.count(":") == 1:
        host, port = nameserver.split(":")
        return host, int(port)
    return nameserver, _DEFAULT_PORT


class Resolver:
    """Sends DNS queries straight to chosen nameservers."""

    def __init__(self, options: QueryOptions | None = None) -> None:
        self.options = options if options is not None else QueryOptions()

    def _message(self, domain: str, record_type: DNSRecordType | str) -> dns.message.Message:
        extra = {"want_dnssec": True, "payload": _EDNS_PAYLOAD} if self.options.check_dnssec else {}
        message = dns.message.make_query(_fqdn(domain), record_type_code(record_type), **extra)
        if not self.options.use_recursion:
            message.flags &= ~dns.flags.RD
        return message

    def query(self, domain: str, record_type: DNSRecordType | str, nameserver: str) -> DNSResult:
        """Query one nameserver; raise DNSQueryError if no response arrives."""
        started = time.monotonic()
        result = DNSResult(
            query=DNSQuery(
                domain=domain,
                record_type=record_type,
                nameserver=nameserver,
                timeout=self.options.timeout,
                use_recursion=self.options.use_recursion,
            ),
            nameserver=nameserver,
            timestamp=datetime.now().astimezone(),
        )

        def fail(message: str) -> DNSQueryError:
            result.response_time = time.monotonic() - started
            error = DNSQueryError(message, result)
            result.error = error
            return error

        try:
            message = self._message(domain, record_type)
            host, port = _split_nameserver(nameserver)
        except _QUERY_ERRORS as exc:
            raise fail(f"DNS query failed: {exc}") from exc

        response = None
        last_error: BaseException | None = None
        for attempt in range(self.options.retries):
            try:
                response = dns.query.udp(message, host, port=port, timeout=self.options.timeout)
            except _QUERY_ERRORS as exc:
                last_error = exc
                if attempt < self.options.retries - 1:
                    time.sleep((attempt + 1) * _RETRY_STEP)
            else:
                last_error = None
                break

        if last_error is not None:
            raise fail(f"DNS query failed: {last_error}") from last_error
        if response is None:
            raise fail("received nil response")

        result.response_time = time.monotonic() - started
        result.records = parse_response(response, record_type)
        return result

    def _query_collecting(self, domain: str, record_type: DNSRecordType | str, nameserver: str) -> DNSResult:
        try:
            return self.query(domain, record_type, nameserver)
        except DNSQueryError as exc:
            return exc.result

    def query_multiple_servers(
        self, domain: str, record_type: DNSRecordType | str, nameservers: Iterable[str]
    ) -> list[DNSResult]:
        """Query every nameserver in parallel; results keep the given order."""
        servers = list(nameservers)
        if not servers:
            return []
        with ThreadPoolExecutor(max_workers=len(servers)) as pool:
            return list(pool.map(lambda ns: self._query_collecting(domain, record_type, ns), servers))

    def check_propagation(
        self, domain: str, record_type: DNSRecordType | str, nameservers: Iterable[str]
    ) -> PropagationResult:
        """Compare the answers of several nameservers for the same question."""
        servers = list(nameservers)
        results = self.query_multiple_servers(domain, record_type, servers)
        propagation = PropagationResult(
            domain=domain,
            record_type=record_type,
            total_servers=len(servers),
            timestamp=datetime.now().astimezone(),
        )
        for server, result in zip(servers, results):
            if result.error is None and result.records:
                propagation.results[server] = result.records
                propagation.success_count += 1
        propagation.inconsistent = check_inconsistency(propagation.results)
        return propagation