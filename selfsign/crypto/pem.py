from typing import Tuple

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm as BackendUnsupported
from cryptography.hazmat.primitives import serialization

from selfsign.common.errors import EncodingFailed
from selfsign.crypto.keys import KeyPair


def encode(cert: x509.Certificate, key_pair: KeyPair) -> Tuple[bytes, bytes]:
    """Return ``(certificate PEM, PKCS#8 private key PEM)``."""
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    try:
        key_pem = key_pair.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption()
        )
    except (ValueError, TypeError, AttributeError, BackendUnsupported) as e:
        raise EncodingFailed(f"cannot serialize {key_pair.family.value} private key: {e}", e) from e
    return cert_pem, key_pem
