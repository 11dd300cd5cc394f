from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from selfsign.common.utils import to_a_label

DEFAULT_VALID_FOR_DAYS = 365
# latest instant X.509 GeneralizedTime can carry
MAX_NOT_AFTER = datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
# keeps not_after inside MAX_NOT_AFTER for any start date before 2100
MAX_VALID_FOR_DAYS = 2_880_000


class KeyFamily(str, Enum):
    RSA = "RSA"
    ECDSA = "ECDSA"
    ED25519 = "Ed25519"


class Curve(str, Enum):
    P224 = "P224"
    P256 = "P256"
    P384 = "P384"
    P521 = "P521"


def _check_hostname(value: Optional[str]) -> Optional[str]:
    if value is not None:
        to_a_label(value)
    return value


def _check_window(valid_from: Optional[datetime], valid_for_days: Optional[int]) -> None:
    if valid_from is None:
        return
    if valid_from.tzinfo is None:
        valid_from = valid_from.replace(tzinfo=timezone.utc)
    days = DEFAULT_VALID_FOR_DAYS if valid_for_days is None else valid_for_days
    if (MAX_NOT_AFTER - valid_from).days < days:
        raise ValueError(f"validity window ends after {MAX_NOT_AFTER:%Y-%m-%d}")


class GenerationRequest(BaseModel):
    """What the caller asks for. ``None`` means the field was not given."""
    hostname: Optional[str] = Field(default=None, min_length=1)
    valid_from: Optional[datetime] = None
    valid_for_days: Optional[int] = Field(default=None, ge=0, le=MAX_VALID_FOR_DAYS)
    is_authority: Optional[bool] = None
    rsa_bits: Optional[int] = None
    # kept as a plain string so unknown curve names reach the key generator
    curve: Optional[str] = None
    use_ed25519: Optional[bool] = None

    @field_validator("hostname")
    @classmethod
    def hostname_is_dns_name(cls, value):
        return _check_hostname(value)

    @model_validator(mode="after")
    def window_fits_generalized_time(self):
        _check_window(self.valid_from, self.valid_for_days)
        return self


class ResolvedParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: str = Field(min_length=1)
    valid_from: datetime
    valid_for_days: int = Field(ge=0, le=MAX_VALID_FOR_DAYS)
    is_authority: bool = False
    rsa_bits: int = 2048
    curve: Optional[str] = None
    use_ed25519: bool = False

    @field_validator("hostname")
    @classmethod
    def hostname_is_dns_name(cls, value):
        return _check_hostname(value)

    @model_validator(mode="after")
    def window_fits_generalized_time(self):
        _check_window(self.valid_from, self.valid_for_days)
        return self
