from typing import Optional


class CertGenError(Exception):
    """Base class for every failure raised while issuing a certificate."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class UnsupportedAlgorithm(CertGenError):
    def __init__(self, curve: str):
        super().__init__(f"unrecognized elliptic curve: {curve!r}")
        self.curve = curve


class AmbiguousAlgorithmSelection(CertGenError):
    def __init__(self, curve: str):
        super().__init__(
            f"both curve {curve!r} and Ed25519 were requested; pick one")
        self.curve = curve


class KeyGenerationFailed(CertGenError):
    pass


class SigningFailed(CertGenError):
    pass


class EncodingFailed(CertGenError):
    pass
