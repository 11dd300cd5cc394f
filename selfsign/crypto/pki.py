import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm as BackendUnsupported
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from selfsign.common.errors import SigningFailed
from selfsign.common.protocol import KeyFamily, ResolvedParameters
from selfsign.common.utils import to_a_label
from selfsign.crypto.keys import KeyPair
from selfsign.crypto.sign import signature_hash, verify_certificate_signature

SERIAL_BITS = 128
# upper bound on commonName from RFC 5280
MAX_COMMON_NAME_LENGTH = 64


@dataclass(frozen=True)
class CertificateTemplate:
    serial_number: int
    subject: x509.Name
    not_before: datetime
    not_after: datetime
    key_usage: x509.KeyUsage
    extended_key_usage: x509.ExtendedKeyUsage
    basic_constraints: x509.BasicConstraints
    subject_alt_name: x509.SubjectAlternativeName

    def to_builder(self, public_key) -> x509.CertificateBuilder:
        # self-signed: the subject doubles as the issuer
        return (x509.CertificateBuilder()
                .subject_name(self.subject)
                .issuer_name(self.subject)
                .public_key(public_key)
                .serial_number(self.serial_number)
                .not_valid_before(self.not_before)
                .not_valid_after(self.not_after)
                .add_extension(self.key_usage, critical=True)
                .add_extension(self.extended_key_usage, critical=False)
                .add_extension(self.basic_constraints, critical=True)
                .add_extension(self.subject_alt_name, critical=False))


def random_serial() -> int:
    # X.509 serials must be positive, so draw from [1, 2**128)
    return secrets.randbelow((1 << SERIAL_BITS) - 1) + 1


def key_usage_for(family: KeyFamily, is_authority: bool) -> x509.KeyUsage:
    """DigitalSignature always, KeyEncipherment for RSA keys, KeyCertSign for authorities."""
    return x509.KeyUsage(
        digital_signature=True,
        content_commitment=False,
        key_encipherment=family is KeyFamily.RSA,
        data_encipherment=False,
        key_agreement=False,
        key_cert_sign=is_authority,
        crl_sign=False,
        encipher_only=False,
        decipher_only=False,
    )


def build_template(params: ResolvedParameters, family: KeyFamily) -> CertificateTemplate:
    not_before = params.valid_from
    not_after = not_before + timedelta(days=params.valid_for_days)
    subject = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, params.hostname[:MAX_COMMON_NAME_LENGTH]),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, params.hostname),
        x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, params.hostname),
    ])
    return CertificateTemplate(
        serial_number=random_serial(),
        subject=subject,
        not_before=not_before,
        not_after=not_after,
        key_usage=key_usage_for(family, params.is_authority),
        extended_key_usage=x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]),
        basic_constraints=x509.BasicConstraints(ca=params.is_authority, path_length=None),
        subject_alt_name=x509.SubjectAlternativeName([x509.DNSName(to_a_label(params.hostname))]),
    )


def self_sign(template: CertificateTemplate, key_pair: KeyPair) -> x509.Certificate:
    try:
        builder = template.to_builder(key_pair.public_key)
        return builder.sign(key_pair.private_key, signature_hash(key_pair))
    except (ValueError, TypeError, BackendUnsupported) as e:
        raise SigningFailed(f"self-signing with {key_pair.family.value} key failed: {e}", e) from e


def validity_window(cert: x509.Certificate):
    return cert.not_valid_before_utc, cert.not_valid_after_utc


def validate_self_signed(pem_bytes: bytes, now: Optional[datetime] = None) -> bool:
    try:
        cert = x509.load_pem_x509_certificate(pem_bytes)
    except ValueError:
        return False

    if cert.issuer != cert.subject:
        return False

    not_before, not_after = validity_window(cert)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if not (not_before <= now <= not_after):
        return False

    try:
        return verify_certificate_signature(cert, cert.public_key())
    except ValueError:
        return False
