from datetime import datetime, timedelta, timezone
from unittest import mock

import dns.exception
import dns.message
import dns.rdatatype
import dns.rrset
import pytest

from systool.dnssec import (
    DNSKEYRecord,
    DNSSECValidationError,
    DSRecord,
    RRSIGRecord,
    ValidationResult,
    get_parent_zone,
    validate_chain_of_trust,
    verify_dnssec,
)

KEY_B64 = "AAECAwQFBgcICQoLDA0ODw=="
DIGEST_HEX = "AB" * 32
NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _sig(inception, expiration):
    return RRSIGRecord(
        type_covered=1,
        algorithm=13,
        labels=2,
        ttl=300,
        expiration=expiration,
        inception=inception,
        key_tag=1,
        signer_name="example.com.",
        signature=KEY_B64,
    )


def _complete(flags=256, sig=None):
    return ValidationResult(
        domain="example.com",
        ds=DSRecord(1, 13, 2, DIGEST_HEX),
        dnskey=[DNSKEYRecord(flags, 3, 13, KEY_B64)],
        rrsig=[sig or _sig(NOW - timedelta(days=1), NOW + timedelta(days=1))],
    )


def _responder(answers):
    def fake_udp(query, where, port=53, timeout=None, **kwargs):
        response = dns.message.make_response(query)
        question = query.question[0]
        texts = answers.get(question.rdtype, [])
        if texts:
            response.answer.append(dns.rrset.from_text(question.name, 300, "IN", question.rdtype, *texts))
        return response

    return fake_udp


SIGNED = {
    dns.rdatatype.DS: [f"12345 13 2 {DIGEST_HEX}"],
    dns.rdatatype.DNSKEY: [f"256 3 13 {KEY_B64}"],
    dns.rdatatype.RRSIG: [f"A 13 2 300 21000101000000 20200101000000 12345 example.com. {KEY_B64}"],
}


@pytest.mark.parametrize(
    "domain, parent",
    [
        ("example.com", "com."),
        ("www.example.com", "example.com."),
        ("example.com.", "com."),
        ("com", ""),
        ("", ""),
    ],
)
def test_get_parent_zone(domain, parent):
    assert get_parent_zone(domain) == parent


def test_validate_complete_result():
    assert validate_chain_of_trust(_complete(), NOW) is True


def test_validate_missing_ds():
    result = _complete()
    result.ds = None
    with pytest.raises(DNSSECValidationError, match="no DS record found"):
        validate_chain_of_trust(result, NOW)


def test_validate_missing_dnskey():
    result = _complete()
    result.dnskey = []
    with pytest.raises(DNSSECValidationError, match="no DNSKEY records found"):
        validate_chain_of_trust(result, NOW)


def test_validate_missing_rrsig():
    result = _complete()
    result.rrsig = []
    with pytest.raises(DNSSECValidationError, match="no RRSIG records found"):
        validate_chain_of_trust(result, NOW)


def test_validate_without_zone_key():
    with pytest.raises(DNSSECValidationError, match="no valid zone signing key found"):
        validate_chain_of_trust(_complete(flags=1), NOW)


@pytest.mark.parametrize(
    "inception, expiration",
    [
        (NOW - timedelta(days=10), NOW - timedelta(days=1)),
        (NOW + timedelta(days=1), NOW + timedelta(days=10)),
    ],
)
def test_validate_timing(inception, expiration):
    with pytest.raises(DNSSECValidationError, match="RRSIG timing validation failed"):
        validate_chain_of_trust(_complete(sig=_sig(inception, expiration)), NOW)


def test_validate_accepts_naive_now():
    assert validate_chain_of_trust(_complete(), NOW.replace(tzinfo=None)) is True


@mock.patch("dns.query.udp")
def test_verify_signed_domain(udp):
    udp.side_effect = _responder(SIGNED)
    result = verify_dnssec("example.com", "192.0.2.53")
    assert result.has_dnssec and result.is_signed and result.is_valid
    assert result.validation_errors == []
    assert result.ds.key_tag == 12345
    assert result.ds.digest_type == 2
    assert result.ds.digest == DIGEST_HEX
    assert result.dnskey[0].flags == 256
    assert result.dnskey[0].public_key == KEY_B64
    sig = result.rrsig[0]
    assert sig.type_covered == dns.rdatatype.A
    assert sig.signer_name == "example.com."
    assert sig.signature == KEY_B64
    assert sig.expiration == datetime(2100, 1, 1, tzinfo=timezone.utc)
    assert sig.inception == datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert all(call.args[1] == "192.0.2.53" for call in udp.call_args_list)
    assert all(call.kwargs["port"] == 53 for call in udp.call_args_list)


@mock.patch("dns.query.udp")
def test_verify_unsigned_domain(udp):
    udp.side_effect = _responder({})
    result = verify_dnssec("example.com", "192.0.2.53")
    assert (result.has_dnssec, result.is_signed, result.is_valid) == (False, False, False)
    assert result.ds is None
    assert result.dnskey == [] and result.rrsig == []
    assert result.validation_errors == []


@mock.patch("dns.query.udp")
def test_verify_single_label_skips_ds(udp):
    udp.side_effect = _responder(SIGNED)
    result = verify_dnssec("com", "192.0.2.53")
    asked = [call.args[0].question[0].rdtype for call in udp.call_args_list]
    assert dns.rdatatype.DS not in asked
    assert len(asked) == 2
    assert result.is_signed and not result.has_dnssec and not result.is_valid


@mock.patch("dns.query.udp")
def test_verify_reports_query_errors(udp):
    udp.side_effect = dns.exception.Timeout
    result = verify_dnssec("example.com", "192.0.2.53")
    assert [error.split(":")[0] for error in result.validation_errors] == [
        "Error querying DS records",
        "Error querying DNSKEY records",
        "Error querying RRSIG records",
    ]
    assert not result.is_valid


@mock.patch("dns.query.udp")
def test_verify_records_chain_failure(udp):
    answers = dict(SIGNED)
    answers[dns.rdatatype.DNSKEY] = [f"1 3 13 {KEY_B64}"]
    udp.side_effect = _responder(answers)
    result = verify_dnssec("example.com", "192.0.2.53")
    assert result.has_dnssec and result.is_signed
    assert result.is_valid is False
    assert result.validation_errors == [
        "Chain of trust validation error: no valid zone signing key found"
    ]