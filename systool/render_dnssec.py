"""Table and CSV renderings of DNSSEC validation results."""

from __future__ import annotations

import csv
from typing import TextIO

from systool.dnssec import DNSKEYRecord, ValidationResult
from systool.table import Table
from systool.textfmt import format_timestamp

_RULE = "-" * 40


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _render(headers: list[str], rows: list[list[str]], writer: TextIO) -> None:
    table = Table(headers)
    for row in rows:
        table.add_row(row)
    table.render(writer)


def _key_type(key: DNSKEYRecord) -> str:
    if key.flags & 256:
        return "Zone Signing Key (ZSK)"
    if key.flags & 257:
        return "Key Signing Key (KSK)"
    return "Unknown"


def dnssec_result_table(result: ValidationResult, writer: TextIO) -> None:
    """Write a validation result as a summary table followed by record tables."""
    writer.write(f"🔐 DNSSEC Validation Results for {result.domain}\n")
    writer.write(f"{_RULE}\n\n")

    rows = [
        ["Has DNSSEC", _flag(result.has_dnssec)],
        ["Is Signed", _flag(result.is_signed)],
        ["Is Valid", _flag(result.is_valid)],
        ["Checked At", format_timestamp(result.timestamp)],
    ]
    if result.validation_errors:
        rows.append(["Validation Errors", "\n".join(result.validation_errors)])
    _render(["Property", "Value"], rows, writer)

    if result.ds is not None:
        writer.write("\n🔑 DS Record Details\n")
        writer.write(f"{_RULE}\n")
        _render(
            ["Property", "Value"],
            [
                ["Key Tag", str(result.ds.key_tag)],
                ["Algorithm", str(result.ds.algorithm)],
                ["Digest Type", str(result.ds.digest_type)],
                ["Digest", result.ds.digest],
            ],
            writer,
        )

    if result.dnskey:
        writer.write("\n🔑 DNSKEY Records\n")
        writer.write(f"{_RULE}\n")
        _render(
            ["Flags", "Protocol", "Algorithm", "Key Type"],
            [[str(key.flags), str(key.protocol), str(key.algorithm), _key_type(key)] for key in result.dnskey],
            writer,
        )

    if result.rrsig:
        writer.write("\n✍️  RRSIG Records\n")
        writer.write(f"{_RULE}\n")
        _render(
            ["Type Covered", "Algorithm", "Labels", "TTL", "Expiration", "Inception"],
            [
                [
                    str(sig.type_covered),
                    str(sig.algorithm),
                    str(sig.labels),
                    str(sig.ttl),
                    format_timestamp(sig.expiration),
                    format_timestamp(sig.inception),
                ]
                for sig in result.rrsig
            ],
            writer,
        )


def dnssec_result_csv(result: ValidationResult, writer: TextIO) -> None:
    """Write a validation result as CSV, with a section for each record kind."""
    out = csv.writer(writer, lineterminator="\n")
    out.writerow(["Domain", "HasDNSSEC", "IsSigned", "IsValid", "ValidationErrors", "CheckedAt"])
    out.writerow(
        [
            result.domain,
            _flag(result.has_dnssec),
            _flag(result.is_signed),
            _flag(result.is_valid),
            "; ".join(result.validation_errors),
            format_timestamp(result.timestamp),
        ]
    )

    if result.ds is not None:
        out.writerow(["", "DS Record Details"])
        out.writerow(["KeyTag", "Algorithm", "DigestType", "Digest"])
        out.writerow(
            [str(result.ds.key_tag), str(result.ds.algorithm), str(result.ds.digest_type), result.ds.digest]
        )

    if result.dnskey:
        out.writerow(["", "DNSKEY Records"])
        out.writerow(["Flags", "Protocol", "Algorithm", "PublicKey"])
        out.writerows(
            [str(key.flags), str(key.protocol), str(key.algorithm), key.public_key] for key in result.dnskey
        )

    if result.rrsig:
        out.writerow(["", "RRSIG Records"])
        out.writerow(
            ["TypeCovered", "Algorithm", "Labels", "TTL", "Expiration", "Inception", "KeyTag", "SignerName"]
        )
        out.writerows(
            [
                str(sig.type_covered),
                str(sig.algorithm),
                str(sig.labels),
                str(sig.ttl),
                format_timestamp(sig.expiration),
                format_timestamp(sig.inception),
                str(sig.key_tag),
                sig.signer_name,
            ]
            for sig in result.rrsig
        )