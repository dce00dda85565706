from datetime import datetime, timedelta, timezone

import pytest

from systool.records import (
    BulkOperation,
    BulkResult,
    BulkSummary,
    ConsistencyIssue,
    DNSQuery,
    DNSRecord,
    DNSRecordType,
    DNSResult,
    OutputFormat,
    PropagationResult,
    QueryOptions,
)

MOMENT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_record_type_lookup_by_value():
    assert DNSRecordType("MX") is DNSRecordType.MX
    assert str(DNSRecordType.AAAA) == "AAAA"
    assert f"{DNSRecordType.TXT}" == "TXT"


def test_record_type_rejects_unknown():
    with pytest.raises(ValueError):
        DNSRecordType("BOGUS")


def test_output_format_and_bulk_operation_values():
    assert OutputFormat("json") is OutputFormat.JSON
    assert str(OutputFormat.TABLE) == "table"
    assert BulkOperation("consistency") is BulkOperation.CONSISTENCY


def test_query_options_defaults():
    options = QueryOptions()
    assert options.timeout == 5.0
    assert options.retries == 3
    assert options.use_recursion is True
    assert options.check_dnssec is False


def test_record_to_dict_omits_zero_priority():
    record = DNSRecord(name="example.com.", type=DNSRecordType.A, value="192.0.2.1", ttl=300)
    data = record.to_dict()
    assert "priority" not in data
    assert data["type"] == "A"
    assert data["ttl"] == 300


def test_record_to_dict_keeps_priority():
    record = DNSRecord(name="example.com.", type=DNSRecordType.MX, value="mail.example.com.", ttl=60, priority=10)
    assert record.to_dict()["priority"] == 10


def test_dns_result_to_dict():
    query = DNSQuery(domain="example.com", record_type=DNSRecordType.A, nameserver="8.8.8.8")
    result = DNSResult(query=query, nameserver="8.8.8.8", timestamp=MOMENT, response_time=0.25)
    data = result.to_dict()
    assert data["response_time"] == 250_000_000
    assert "error" not in data
    assert data["query"]["domain"] == "example.com"
    assert data["timestamp"] == MOMENT.isoformat()


def test_dns_result_to_dict_with_error():
    query = DNSQuery(domain="example.com", record_type=DNSRecordType.A, nameserver="8.8.8.8")
    result = DNSResult(query=query, nameserver="8.8.8.8", timestamp=MOMENT, error=RuntimeError("boom"))
    assert result.to_dict()["error"] == "boom"
    assert result.records == []


def test_propagation_result_to_dict():
    record = DNSRecord(name="example.com.", type=DNSRecordType.A, value="192.0.2.1", ttl=300)
    result = PropagationResult(
        domain="example.com",
        record_type=DNSRecordType.A,
        total_servers=2,
        timestamp=MOMENT,
        results={"8.8.8.8": [record]},
        success_count=1,
    )
    data = result.to_dict()
    assert data["results"]["8.8.8.8"][0]["value"] == "192.0.2.1"
    assert data["success_count"] == 1
    assert data["inconsistent"] is False


def test_consistency_issue_to_dict_omits_empty_fields():
    issue = ConsistencyIssue(
        type="dmarc_weak_policy",
        domain="example.com",
        record_type=DNSRecordType.TXT,
        description="weak",
        severity="medium",
        servers=["8.8.8.8"],
        actual="p=none",
    )
    data = issue.to_dict()
    assert "expected" not in data
    assert data["actual"] == "p=none"
    assert data["servers"] == ["8.8.8.8"]


def test_bulk_result_duration_and_dict():
    end = MOMENT + timedelta(seconds=2)
    result = BulkResult(domain="example.com", success=False, start_time=MOMENT, end_time=end, error=ValueError("bad"))
    assert result.duration == 2.0
    data = result.to_dict()
    assert data["Error"] == "bad"
    assert data["Data"] is None


def test_bulk_summary_to_dict_nests_results():
    record = DNSRecord(name="example.com.", type=DNSRecordType.A, value="192.0.2.1", ttl=300)
    result = BulkResult(domain="example.com", success=True, start_time=MOMENT, end_time=MOMENT, data=[record])
    summary = BulkSummary(total_domains=1, successful=1, failed=0, duration=1.0, results=[result])
    data = summary.to_dict()
    assert data["Duration"] == 1_000_000_000
    assert data["Results"][0]["Data"] == [record.to_dict()]
    assert data["TotalDomains"] == 1