from dataclasses import dataclass
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm as BackendUnsupported
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from selfsign.common.errors import (AmbiguousAlgorithmSelection, KeyGenerationFailed,
                                    UnsupportedAlgorithm)
from selfsign.common.protocol import Curve, KeyFamily, ResolvedParameters

RSA_PUBLIC_EXPONENT = 65537

EC_CURVES = {
    Curve.P224: ec.SECP224R1,
    Curve.P256: ec.SECP256R1,
    Curve.P384: ec.SECP384R1,
    Curve.P521: ec.SECP521R1,
}

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey, ed25519.Ed25519PrivateKey]


@dataclass(frozen=True)
class KeyPair:
    family: KeyFamily
    private_key: PrivateKey
    curve: Optional[Curve] = None

    @property
    def public_key(self):
        return self.private_key.public_key()


def parse_curve(name: str) -> Curve:
    try:
        return Curve(name)
    except ValueError:
        raise UnsupportedAlgorithm(name) from None


def select_family(params: ResolvedParameters) -> KeyFamily:
    """Pick the key family for ``params`` without generating anything.

    Raises AmbiguousAlgorithmSelection when a curve and Ed25519 are both set,
    UnsupportedAlgorithm for an unknown curve name.
    """
    if params.curve is not None:
        if params.use_ed25519:
            raise AmbiguousAlgorithmSelection(params.curve)
        parse_curve(params.curve)
        return KeyFamily.ECDSA
    if params.use_ed25519:
        return KeyFamily.ED25519
    return KeyFamily.RSA


def generate_key_pair(params: ResolvedParameters) -> KeyPair:
    family = select_family(params)
    try:
        if family is KeyFamily.ECDSA:
            curve = parse_curve(params.curve)
            key = ec.generate_private_key(EC_CURVES[curve]())
            return KeyPair(family, key, curve)
        if family is KeyFamily.ED25519:
            return KeyPair(family, ed25519.Ed25519PrivateKey.generate())
        key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT,
                                       key_size=params.rsa_bits)
        return KeyPair(family, key)
    except (ValueError, TypeError, BackendUnsupported) as e:
        raise KeyGenerationFailed(f"{family.value} key generation failed: {e}", e) from e
