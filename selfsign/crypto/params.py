from datetime import datetime, timezone
from typing import Callable, Optional

from selfsign.common.protocol import DEFAULT_VALID_FOR_DAYS, GenerationRequest, ResolvedParameters
from selfsign.common.utils import UNKNOWN_HOST, local_hostname, now_utc, to_a_label

DEFAULT_RSA_BITS = 2048


def _default_hostname(provider: Callable[[], str]) -> str:
    try:
        name = provider()
    except OSError:
        return UNKNOWN_HOST
    if not name:
        return UNKNOWN_HOST
    try:
        to_a_label(name)
    except ValueError:
        return UNKNOWN_HOST
    return name


def _as_utc(ts: datetime) -> datetime:
    # naive timestamps are taken as UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def resolve(request: GenerationRequest,
            clock: Optional[Callable[[], datetime]] = None,
            hostname_provider: Optional[Callable[[], str]] = None) -> ResolvedParameters:
    """Fill every unset field of ``request`` with its default.

    Only ``None`` counts as unset, so an explicit ``valid_for_days=0`` or
    ``is_authority=False`` is kept. ``clock`` and ``hostname_provider`` are
    only called when their field is missing.
    """
    clock = clock or now_utc
    hostname_provider = hostname_provider or local_hostname

    hostname = request.hostname
    if hostname is None:
        hostname = _default_hostname(hostname_provider)

    valid_from = request.valid_from
    if valid_from is None:
        valid_from = clock()

    valid_for_days = request.valid_for_days
    if valid_for_days is None:
        valid_for_days = DEFAULT_VALID_FOR_DAYS

    rsa_bits = request.rsa_bits
    if rsa_bits is None:
        rsa_bits = DEFAULT_RSA_BITS

    return ResolvedParameters(
        hostname=hostname,
        valid_from=_as_utc(valid_from),
        valid_for_days=valid_for_days,
        is_authority=bool(request.is_authority),
        rsa_bits=rsa_bits,
        curve=request.curve or None,
        use_ed25519=bool(request.use_ed25519),
    )
