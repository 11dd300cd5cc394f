from typing import Optional

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding as asymp, rsa

from selfsign.common.protocol import Curve, KeyFamily
from selfsign.crypto.keys import KeyPair

EC_HASHES = {
    Curve.P224: hashes.SHA256,
    Curve.P256: hashes.SHA256,
    Curve.P384: hashes.SHA384,
    Curve.P521: hashes.SHA512,
}


def signature_hash(key_pair: KeyPair) -> Optional[hashes.HashAlgorithm]:
    """Hash to sign with for this key; Ed25519 signs the message directly."""
    if key_pair.family is KeyFamily.RSA:
        return hashes.SHA256()
    if key_pair.family is KeyFamily.ECDSA:
        return EC_HASHES[key_pair.curve]()
    if key_pair.family is KeyFamily.ED25519:
        return None
    raise ValueError(f"no signature scheme for {key_pair.family}")


def family_of(public_key) -> KeyFamily:
    if isinstance(public_key, rsa.RSAPublicKey):
        return KeyFamily.RSA
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        return KeyFamily.ECDSA
    if isinstance(public_key, ed25519.Ed25519PublicKey):
        return KeyFamily.ED25519
    raise ValueError(f"unsupported public key type: {type(public_key).__name__}")


def verify_certificate_signature(cert: x509.Certificate, public_key) -> bool:
    family = family_of(public_key)
    try:
        if family is KeyFamily.RSA:
            public_key.verify(cert.signature, cert.tbs_certificate_bytes,
                              asymp.PKCS1v15(), cert.signature_hash_algorithm)
        elif family is KeyFamily.ECDSA:
            public_key.verify(cert.signature, cert.tbs_certificate_bytes,
                              ec.ECDSA(cert.signature_hash_algorithm))
        else:
            public_key.verify(cert.signature, cert.tbs_certificate_bytes)
        return True
    except InvalidSignature:
        return False
