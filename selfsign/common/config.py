import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from selfsign.common.protocol import GenerationRequest

REQUEST_ENV = {
    "hostname": "SELFSIGN_HOSTNAME",
    "valid_from": "SELFSIGN_VALID_FROM",
    "valid_for_days": "SELFSIGN_VALID_FOR_DAYS",
    "is_authority": "SELFSIGN_IS_CA",
    "rsa_bits": "SELFSIGN_RSA_BITS",
    "curve": "SELFSIGN_CURVE",
    "use_ed25519": "SELFSIGN_ED25519",
}


@dataclass(frozen=True)
class Settings:
    out_dir: str = "certs"
    name: str = "server"
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file or find_dotenv(usecwd=True))
    return Settings(
        out_dir=os.getenv("SELFSIGN_OUT_DIR", "certs"),
        name=os.getenv("SELFSIGN_NAME", "server"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def request_from_env(env: Optional[Mapping[str, str]] = None) -> GenerationRequest:
    """Build a request from SELFSIGN_* variables; missing or empty ones stay unset."""
    env = os.environ if env is None else env
    values = {}
    for field, var in REQUEST_ENV.items():
        raw = env.get(var)
        if raw is not None and raw.strip() != "":
            values[field] = raw.strip()
    return GenerationRequest(**values)
