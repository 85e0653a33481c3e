"""Library-wide settings.

Settings are process-global and immutable; configure() swaps in a new
instance:

    from cqlstruct import configure, DecodePolicy

    configure(decode_policy=DecodePolicy.STRICT)

The initial decode policy can be seeded from the environment:

    export CQLSTRUCT_DECODE_POLICY=strict

Decode policy:
    Applies when mapping_to_struct() decodes a list of JSON strings into a
    list of typed elements. LENIENT drops the elements that fail to decode,
    so the resulting list may be shorter than the source. STRICT raises
    EncodingError on the first bad element.

    Per-record overrides go in Record.Meta.decode_policy; an explicit
    decode_policy argument wins over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

ENV_DECODE_POLICY = "CQLSTRUCT_DECODE_POLICY"


class DecodePolicy(str, Enum):
    """How JSON element decode failures are handled."""

    LENIENT = "lenient"
    STRICT = "strict"


@dataclass(frozen=True, slots=True)
class Settings:
    """Global translation settings."""

    decode_policy: DecodePolicy = DecodePolicy.LENIENT


def _settings_from_env() -> Settings:
    raw = os.environ.get(ENV_DECODE_POLICY)
    if not raw:
        return Settings()
    try:
        return Settings(decode_policy=DecodePolicy(raw.strip().lower()))
    except ValueError:
        allowed = ", ".join(p.value for p in DecodePolicy)
        raise ValueError(
            f"{ENV_DECODE_POLICY}={raw!r} is not a valid decode policy ({allowed})"
        ) from None


_SETTINGS: Settings = _settings_from_env()


def get_settings() -> Settings:
    """Return the active settings."""
    return _SETTINGS


def configure(**overrides: Any) -> Settings:
    """Replace the active settings with the given fields overridden."""
    global _SETTINGS
    if "decode_policy" in overrides:
        overrides["decode_policy"] = DecodePolicy(overrides["decode_policy"])
    _SETTINGS = replace(_SETTINGS, **overrides)
    return _SETTINGS


def reset_settings() -> Settings:
    """Restore settings from the environment/defaults (used in tests)."""
    global _SETTINGS
    _SETTINGS = _settings_from_env()
    return _SETTINGS


__all__ = [
    "ENV_DECODE_POLICY",
    "DecodePolicy",
    "Settings",
    "get_settings",
    "configure",
    "reset_settings",
]
