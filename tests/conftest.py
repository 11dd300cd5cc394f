from datetime import datetime, timezone

import pytest

from selfsign.common.protocol import GenerationRequest
from selfsign.crypto.params import resolve

FIXED_NOW = datetime(2026, 3, 1, 12, 30, 0, tzinfo=timezone.utc)
FIXED_HOST = "build-box.local"


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def hostname_provider():
    return lambda: FIXED_HOST


@pytest.fixture
def resolve_fixed(clock, hostname_provider):
    def _resolve(**fields):
        return resolve(GenerationRequest(**fields), clock, hostname_provider)
    return _resolve


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for var in ("SELFSIGN_HOSTNAME", "SELFSIGN_VALID_FROM", "SELFSIGN_VALID_FOR_DAYS",
                "SELFSIGN_IS_CA", "SELFSIGN_RSA_BITS", "SELFSIGN_CURVE", "SELFSIGN_ED25519",
                "SELFSIGN_OUT_DIR", "SELFSIGN_NAME", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def fixed_host():
    return FIXED_HOST
