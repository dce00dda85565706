# systool

A Python library for network administrators: query DNS records on chosen
nameservers, check how a record has propagated across public resolvers, look
for common DNS misconfigurations, run these checks over many domains at once,
verify DNSSEC, and inspect a server's TLS certificate.

## Installation

```
pip install .
```

Requires Python 3.10 or later, `dnspython` and `cryptography`.

## Querying DNS

```python
from systool.records import DNSRecordType, QueryOptions
from systool.resolver import DNSQueryError, Resolver

resolver = Resolver()                      # 5 s timeout, 3 tries, recursion on
result = resolver.query("example.com", DNSRecordType.MX, "1.1.1.1")
for record in result.records:
    print(record.name, record.value, record.ttl, record.priority)
```

`Resolver.query` sends the question over UDP straight to the given
nameserver (port 53 unless written as `host:port` or `[v6addr]:port`),
retrying with a growing pause. If no response arrives it raises
`DNSQueryError`, whose `result` attribute holds the partial `DNSResult`.
Supported record types are A, AAAA, CNAME, MX, NS, TXT, SOA, PTR and SRV.
`QueryOptions` sets the timeout, retries, recursion and whether DNSSEC
records are requested.

## Propagation

```python
from systool.nameservers import get_default_nameservers

servers = [str(ns.ip) for ns in get_default_nameservers()]
propagation = resolver.check_propagation("example.com", DNSRecordType.A, servers)
print(propagation.success_count, "of", propagation.total_servers, "answered")
print("inconsistent" if propagation.inconsistent else "consistent")
```

All nameservers are asked in parallel. Only servers that answered with
records appear in `propagation.results`; the result is inconsistent when
those servers disagree on the set of values.

`systool.nameservers` lists well-known public resolvers by provider in
`COMMON_NAMESERVERS` (google, cloudflare, quad9, opendns, godaddy,
squarespace, namecheap, dyn, comodo, verisign, adguard, cleanbrowing,
alternate, level3). `get_all_nameservers()`, `get_provider_nameservers(name)`
and `get_default_nameservers()` (Google, Cloudflare and Quad9) return
`Nameserver` entries.

## Consistency checks

```python
from systool.consistency import ConsistencyChecker

checker = ConsistencyChecker(resolver)
for issue in checker.check_consistency("example.com", servers):
    print(issue.severity, issue.type, issue.description)
```

A, AAAA, MX, NS and TXT records are checked. Issues reported include records
that differ between servers, MX records with priority 0, fewer than two
nameservers, TXT records over 255 bytes, and problems in SPF (several
`v=spf1`, too long, more than 10 lookups), DMARC (missing or `none` policy)
and DKIM (missing or empty public key) records. The individual checks are
available as `validate_spf_record`, `validate_dmarc_record`,
`validate_dkim_record`, `check_specific_issues` and `determine_severity`.

## Bulk runs

```python
from systool.bulk import BulkProcessor
from systool.domains import read_domains_from_file

domains = read_domains_from_file("domains.txt")

def progress(current, total, domain, success):
    print(f"[{current}/{total}] {domain} {'ok' if success else 'failed'}")

processor = BulkProcessor(resolver, concurrency=5, progress_callback=progress)
summary = processor.process_query(domains, DNSRecordType.A, ["8.8.8.8"])
print(summary.successful, "succeeded,", summary.failed, "failed")
```

`read_domains_from_file` reads one domain per line, skipping blank lines and
lines starting with `#`; it raises `ValueError` on an invalid domain or an
empty list. `process_query` uses the first nameserver given;
`process_propagation` and `process_consistency` use them all. Results arrive
in completion order; a domain whose consistency check finds issues still
counts as a success.

## DNSSEC

```python
from systool.dnssec import verify_dnssec

result = verify_dnssec("example.com", "8.8.8.8")
print(result.has_dnssec, result.is_signed, result.is_valid)
print(result.validation_errors)
```

DS, DNSKEY and RRSIG records are looked up, and the chain of trust is judged
by `validate_chain_of_trust`: a DS record, a zone signing key, and signatures
within their validity window. Query failures are collected in
`validation_errors` rather than raised.

## TLS certificates

```python
from systool.certs import check_certificate

info = check_certificate("example.com", 443)
print(info.common_name, info.issuer, info.expires_in, info.is_valid)
```

The certificate is fetched without verifying the chain and described as a
`CertInfo`. `ConnectionError` is raised when the connection fails.
`cert_info_from_der` describes a DER-encoded certificate already in hand.

## Rendering results

Text tables and CSV can be written to any text stream:

- `systool.render_certs`: `cert_info_table`, `cert_info_csv`
- `systool.render_dnssec`: `dnssec_result_table`, `dnssec_result_csv`
- `systool.render_bulk`: `bulk_summary_table`, `bulk_summary_csv`

```python
import sys
from systool.render_bulk import bulk_summary_table

bulk_summary_table(summary, sys.stdout)
```

`systool.table.Table` draws box tables, and `systool.textfmt` offers
`truncate`, `format_duration` and `format_timestamp`. DNS results, bulk
results and summaries also have `to_dict()` for JSON output.

## What is not included

- There is no command-line program; everything is used from Python.
- There are no table or CSV renderers for single query results, propagation
  results or lists of consistency issues, and no XML output.

## Running the tests

```
pip install .[test]
pytest
```