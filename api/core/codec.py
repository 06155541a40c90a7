"""
Identifier and timestamp translation between wire and storage forms.

Wire form:
- identifiers are canonical hyphenated UUID strings (case-insensitive);
  braced, `urn:uuid:` and bare-hex forms are rejected
- timestamps are ISO-8601 UTC strings with millisecond precision ("...Z")

Storage form:
- identifiers are `uuid.UUID` (Postgres `uuid`)
- timestamps are naive UTC datetimes (Postgres `timestamp`, no offset)
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from . import errors


def parse_identifier(wire: str) -> uuid.UUID:
    raw = (wire or "").strip()
    if not raw:
        raise errors.InvalidIdentifier("Identifier is empty.")
    try:
        parsed = uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError) as exc:
        raise errors.InvalidIdentifier(f"Identifier is not a valid UUID: {raw[:64]!r}.") from exc
    if str(parsed) != raw.lower():
        raise errors.InvalidIdentifier(f"Identifier is not a canonical UUID: {raw[:64]!r}.")
    return parsed


def mint_identifier() -> uuid.UUID:
    return uuid.uuid4()


def to_wire_identifier(value: uuid.UUID) -> str:
    return str(value)


def _truncate_ms(dt: datetime) -> datetime:
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    """
    Current time as an aware UTC datetime, truncated to milliseconds so it
    survives the wire round-trip unchanged.
    """
    return _truncate_ms(datetime.now(timezone.utc))


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_wire_timestamp(dt: datetime) -> str:
    return _as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_wire_timestamp(wire: str) -> datetime:
    raw = (wire or "").strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except (ValueError, TypeError) as exc:
        raise errors.ValidationError(f"Timestamp is not ISO-8601: {wire!r}.") from exc
    return _truncate_ms(_as_utc(parsed))


def to_storage_timestamp(dt: datetime) -> datetime:
    return _as_utc(dt).replace(tzinfo=None)


def from_storage_timestamp(dt: datetime) -> datetime:
    # Postgres `timestamp` columns come back naive and are always UTC here.
    return _as_utc(dt)
