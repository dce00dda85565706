"""TLS certificate inspection."""

from __future__ import annotations

import socket
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.x509.oid import NameOID

_SIGNATURE_NAMES = {
    "1.2.840.113549.1.1.2": "MD2-RSA",
    "1.2.840.113549.1.1.4": "MD5-RSA",
    "1.2.840.113549.1.1.5": "SHA1-RSA",
    "1.2.840.113549.1.1.11": "SHA256-RSA",
    "1.2.840.113549.1.1.12": "SHA384-RSA",
    "1.2.840.113549.1.1.13": "SHA512-RSA",
    "1.2.840.10040.4.3": "DSA-SHA1",
    "2.16.840.1.101.3.4.3.2": "DSA-SHA256",
    "1.2.840.10045.4.1": "ECDSA-SHA1",
    "1.2.840.10045.4.3.2": "ECDSA-SHA256",
    "1.2.840.10045.4.3.3": "ECDSA-SHA384",
    "1.2.840.10045.4.3.4": "ECDSA-SHA512",
    "1.3.101.112": "Ed25519",
}
_RSA_PSS_OID = "1.2.840.113549.1.1.10"


@dataclass
class CertInfo:
    """Details of a server's leaf certificate."""

    domain: str
    issuer: str
    common_name: str
    not_before: datetime
    not_after: datetime
    expires_in: int
    is_valid: bool
    serial_number: str
    signature_alg: str
    dns_names: list[str] = field(default_factory=list)


def _signature_name(cert: x509.Certificate) -> str:
    oid = cert.signature_algorithm_oid.dotted_string
    if oid == _RSA_PSS_OID:
        try:
            digest = cert.signature_hash_algorithm
        except UnsupportedAlgorithm:
            digest = None
        if digest is not None:
            return f"{digest.name.upper()}-RSAPSS"
    return _SIGNATURE_NAMES.get(oid, "0")


def _common_name(cert: x509.Certificate) -> str:
    attributes = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attributes:
        return ""
    value = attributes[-1].value
    return value.decode("utf-8", "replace") if isinstance(value, bytes) else value


def _dns_names(cert: x509.Certificate) -> list[str]:
    try:
        extension = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []
    return list(extension.value.get_values_for_type(x509.DNSName))


def cert_info_from_der(domain: str, der: bytes, now: datetime | None = None) -> CertInfo:
    """Describe a DER-encoded certificate as seen at the moment now."""
    cert = x509.load_der_x509_certificate(der)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    not_before = cert.not_valid_before_utc
    not_after = cert.not_valid_after_utc
    return CertInfo(
        domain=domain,
        issuer=cert.issuer.rfc4514_string(),
        common_name=_common_name(cert),
        dns_names=_dns_names(cert),
        not_before=not_before,
        not_after=not_after,
        expires_in=int((not_after - now).total_seconds() / 86400),
        is_valid=not_before < now < not_after,
        serial_number=str(cert.serial_number),
        signature_alg=_signature_name(cert),
    )


def check_certificate(domain: str, port: str | int = "443") -> CertInfo:
    """Connect to domain:port over TLS and describe the presented certificate.

    The chain is not verified; the certificate is only inspected.
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    try:
        with socket.create_connection((domain, int(port))) as sock:
            with context.wrap_socket(sock, server_hostname=domain) as tls:
                der = tls.getpeercert(binary_form=True)
    except (OSError, ValueError) as exc:
        raise ConnectionError(f"failed to connect: {exc}") from exc
    if not der:
        raise ConnectionError("no certificates presented")
    return cert_info_from_der(domain, der)