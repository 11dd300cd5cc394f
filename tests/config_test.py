from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from selfsign.common.config import Settings, load_settings, request_from_env


def test_empty_env_leaves_everything_unset():
    request = request_from_env({})
    assert request.model_dump(exclude_none=True) == {}


def test_env_values_are_coerced():
    request = request_from_env({
        "SELFSIGN_HOSTNAME": "svc.internal",
        "SELFSIGN_VALID_FROM": "2025-06-01T00:00:00+00:00",
        "SELFSIGN_VALID_FOR_DAYS": "0",
        "SELFSIGN_IS_CA": "true",
        "SELFSIGN_RSA_BITS": "3072",
        "SELFSIGN_CURVE": "P521",
        "SELFSIGN_ED25519": "false",
    })
    assert request.hostname == "svc.internal"
    assert request.valid_from == datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert request.valid_for_days == 0
    assert request.is_authority is True
    assert request.rsa_bits == 3072
    assert request.curve == "P521"
    assert request.use_ed25519 is False


def test_blank_values_count_as_unset():
    request = request_from_env({"SELFSIGN_HOSTNAME": "  ", "SELFSIGN_VALID_FOR_DAYS": ""})
    assert request.hostname is None
    assert request.valid_for_days is None


def test_bad_values_raise():
    with pytest.raises(ValidationError):
        request_from_env({"SELFSIGN_VALID_FOR_DAYS": "soon"})


def test_settings_defaults(clean_env):
    assert load_settings() == Settings()


def test_settings_from_dotenv_file(clean_env):
    env_file = clean_env / "custom.env"
    env_file.write_text("SELFSIGN_OUT_DIR=out\nSELFSIGN_NAME=edge\nLOG_LEVEL=DEBUG\n")
    settings = load_settings(str(env_file))
    assert settings == Settings(out_dir="out", name="edge", log_level="DEBUG")
