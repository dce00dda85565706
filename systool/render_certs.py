"""Table and CSV renderings of certificate details."""

from __future__ import annotations

import csv
from typing import TextIO

from systool.certs import CertInfo
from systool.table import Table
from systool.textfmt import format_timestamp, truncate

_RULE = "-" * 40

_CSV_HEADER = [
    "Domain",
    "CommonName",
    "Issuer",
    "ValidFrom",
    "ValidUntil",
    "ExpiresIn",
    "IsValid",
    "SerialNumber",
    "SignatureAlgorithm",
    "DNSNames",
]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def cert_info_table(info: CertInfo, writer: TextIO) -> None:
    """Write certificate details as a two-column table."""
    writer.write(f"🔒 SSL Certificate Information for {info.domain}\n")
    writer.write(f"{_RULE}\n\n")
    table = Table(["Field", "Value"])
    for row in (
        ["Common Name", info.common_name],
        ["Issuer", truncate(info.issuer, 60)],
        ["Valid From", format_timestamp(info.not_before)],
        ["Valid Until", format_timestamp(info.not_after)],
        ["Expires In", f"{info.expires_in} days"],
        ["Is Valid", _flag(info.is_valid)],
        ["Serial Number", info.serial_number],
        ["Signature Algorithm", info.signature_alg],
        ["DNS Names", truncate(", ".join(info.dns_names), 60)],
    ):
        table.add_row(row)
    table.render(writer)


def cert_info_csv(info: CertInfo, writer: TextIO) -> None:
    """Write certificate details as a CSV header and one row."""
    out = csv.writer(writer, lineterminator="\n")
    out.writerow(_CSV_HEADER)
    out.writerow(
        [
            info.domain,
            info.common_name,
            info.issuer,
            format_timestamp(info.not_before),
            format_timestamp(info.not_after),
            str(info.expires_in),
            _flag(info.is_valid),
            info.serial_number,
            info.signature_alg,
            ";".join(info.dns_names),
        ]
    )