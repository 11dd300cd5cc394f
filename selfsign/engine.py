import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Tuple

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from selfsign.common.protocol import GenerationRequest, ResolvedParameters
from selfsign.common.utils import cert_fingerprint_hex
from selfsign.crypto.pem import encode
from selfsign.crypto.keys import KeyPair, generate_key_pair
from selfsign.crypto.params import resolve
from selfsign.crypto.pki import build_template, self_sign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedCertificate:
    params: ResolvedParameters
    certificate: x509.Certificate
    key_pair: KeyPair

    def der(self) -> bytes:
        return self.certificate.public_bytes(serialization.Encoding.DER)

    def pem(self) -> Tuple[bytes, bytes]:
        return encode(self.certificate, self.key_pair)

    def fingerprint(self) -> str:
        return cert_fingerprint_hex(self.certificate)


def generate(request: Optional[GenerationRequest] = None,
             clock: Optional[Callable[[], datetime]] = None,
             hostname_provider: Optional[Callable[[], str]] = None) -> IssuedCertificate:
    """Resolve, generate a key, build and self-sign. Stops at the first error."""
    params = resolve(request or GenerationRequest(), clock, hostname_provider)
    key_pair = generate_key_pair(params)
    template = build_template(params, key_pair.family)
    cert = self_sign(template, key_pair)
    logger.debug("issued %s certificate for %s serial=%x",
                 key_pair.family.value, params.hostname, template.serial_number)
    return IssuedCertificate(params, cert, key_pair)
