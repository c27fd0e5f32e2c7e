# lazyfuse/config.py
#
# Process-wide settings for materialization. Initial values are read from
# the environment when the module is first imported, so a script can be
# tuned without code changes:
#
#   LAZYFUSE_LENGTH_POLICY      "strict" (default) or "prefix"
#   LAZYFUSE_REUSE_TEMPORARIES  "1"/"true" (default) or "0"/"false"

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace

LENGTH_POLICIES = ("strict", "prefix")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    Attributes:
        length_policy: "strict" requires every operand collection to have
            exactly the destination's length; "prefix" only requires at least
            that many elements.
        reuse_temporaries: Whether a node may update the temporary produced by
            its left sub-expression in place (`tmp += right`) instead of
            building a new value.
    """
    length_policy: str = "strict"
    reuse_temporaries: bool = True


def _parse_bool(name, raw):
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _validate(settings: Settings) -> Settings:
    if settings.length_policy not in LENGTH_POLICIES:
        raise ValueError(
            f"Unknown length policy {settings.length_policy!r}; "
            f"expected one of {', '.join(LENGTH_POLICIES)}."
        )
    if not isinstance(settings.reuse_temporaries, bool):
        raise ValueError("reuse_temporaries must be a bool.")
    return settings


def _from_environment() -> Settings:
    settings = Settings()
    policy = os.getenv("LAZYFUSE_LENGTH_POLICY")
    if policy:
        settings = replace(settings, length_policy=policy.strip().lower())
    reuse = os.getenv("LAZYFUSE_REUSE_TEMPORARIES")
    if reuse:
        settings = replace(
            settings,
            reuse_temporaries=_parse_bool("LAZYFUSE_REUSE_TEMPORARIES", reuse),
        )
    return _validate(settings)


_settings = _from_environment()


def get_settings() -> Settings:
    return _settings


def configure(**changes) -> Settings:
    """
    Updates the active settings and returns them.

    Raises:
        ValueError: On an unknown setting name or an invalid value.
    """
    global _settings
    unknown = set(changes) - set(Settings.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}.")
    _settings = _validate(replace(_settings, **changes))
    return _settings


def reset() -> Settings:
    """Restores the settings derived from the environment."""
    global _settings
    _settings = _from_environment()
    return _settings


@contextmanager
def options(**changes):
    """
    Temporarily overrides settings for the duration of a `with` block.

    Example:
        with lazyfuse.options(length_policy="prefix"):
            dest.assign(a + b)
    """
    global _settings
    previous = _settings
    try:
        yield configure(**changes)
    finally:
        _settings = previous
