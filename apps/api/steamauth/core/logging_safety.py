"""Helpers that keep identities and attacker-controlled values out of logs."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for a SteamID or correlation id."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def describe_field_shapes(fields: Mapping[str, Any]) -> str:
    """Summarize ``openid.*`` keys and value types without logging the values."""
    shapes = [
        f"{key}:{type(value).__name__}"
        for key, value in sorted(fields.items(), key=lambda item: str(item[0]))
        if str(key).startswith("openid.")
    ]
    return ",".join(shapes) or "none"
