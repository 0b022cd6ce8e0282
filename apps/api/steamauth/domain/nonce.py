"""Response nonce freshness rules."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from steamauth.errors import InvalidAssertionError, OpenIDErrorKind

NONCE_FIELD = "openid.response_nonce"
NONCE_TIMESTAMP_LENGTH = 20
DEFAULT_MAX_SKEW_SECONDS = 300

_TIMESTAMP_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})Z")


def parse_nonce_timestamp(nonce: str) -> datetime:
    """Parse the leading ``YYYY-MM-DDTHH:MM:SSZ`` timestamp of a response nonce.

    Anything after the first 20 characters is the provider's uniqueness suffix and
    is not inspected. A well-formed timestamp that is not a real calendar instant
    (month 13, Feb 30, hour 24) is reported as ``NONCE_TOO_OLD``.
    """
    match = _TIMESTAMP_PATTERN.fullmatch(nonce[:NONCE_TIMESTAMP_LENGTH])
    if match is None:
        raise InvalidAssertionError(
            OpenIDErrorKind.MALFORMED_NONCE,
            f"Wrong {NONCE_FIELD}: malformed timestamp",
            field=NONCE_FIELD,
        )

    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    except ValueError as exc:
        raise InvalidAssertionError(
            OpenIDErrorKind.NONCE_TOO_OLD,
            f"Wrong {NONCE_FIELD}: timestamp is not a valid date",
            field=NONCE_FIELD,
        ) from exc


def check_nonce_freshness(
    nonce: str,
    now: datetime | None = None,
    *,
    max_skew_seconds: int = DEFAULT_MAX_SKEW_SECONDS,
) -> None:
    """Reject nonces whose timestamp is more than ``max_skew_seconds`` away from now.

    Skew is checked in both directions. Consumed nonces are not remembered, so a
    fresh assertion can be verified again until it ages out.
    """
    issued_at = parse_nonce_timestamp(nonce)
    current = now if now is not None else datetime.now(UTC)
    if abs((current - issued_at).total_seconds()) > max_skew_seconds:
        raise InvalidAssertionError(
            OpenIDErrorKind.NONCE_TOO_OLD,
            f"Wrong {NONCE_FIELD}: nonce is too old",
            field=NONCE_FIELD,
        )


def format_nonce_timestamp(moment: datetime) -> str:
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
