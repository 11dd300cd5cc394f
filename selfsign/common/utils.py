import hashlib, socket
from datetime import datetime, timezone
from typing import Union

from cryptography import x509
from cryptography.hazmat.primitives import hashes

UNKNOWN_HOST = "unknown"
MAX_HOSTNAME_LENGTH = 253


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def local_hostname() -> str:
    return socket.gethostname()


def sha256_hex(data: Union[bytes, str]) -> str:
    if isinstance(data, str): data = data.encode()
    return hashlib.sha256(data).hexdigest()


def cert_fingerprint_hex(cert: x509.Certificate) -> str:
    return cert.fingerprint(hashes.SHA256()).hex()


def to_a_label(hostname: str) -> str:
    """ASCII (IDNA) form of ``hostname`` for DNS name fields.

    Raises ValueError for names that cannot be encoded or exceed 253 characters.
    """
    try:
        encoded = hostname.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise ValueError(f"hostname {hostname!r} is not a valid DNS name: {e}") from None
    if len(encoded.rstrip(".")) > MAX_HOSTNAME_LENGTH:
        raise ValueError(f"hostname is longer than {MAX_HOSTNAME_LENGTH} characters")
    return encoded
