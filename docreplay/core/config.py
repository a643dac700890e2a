"""
Replay configuration.

ReplayConfig is an immutable value passed to each replay, so concurrent
replays of different documents never share mutable settings.

Environment Variables (read by ReplayConfig.from_env):
    DOCREPLAY_REMOVE_MISSING_ELEMENT_IS_ERROR: default true
    DOCREPLAY_REMOVE_MISSING_ARRAY_ELEMENT_IS_ERROR: default false
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

ENV_REMOVE_MISSING_ELEMENT = "DOCREPLAY_REMOVE_MISSING_ELEMENT_IS_ERROR"
ENV_REMOVE_MISSING_ARRAY_ELEMENT = "DOCREPLAY_REMOVE_MISSING_ARRAY_ELEMENT_IS_ERROR"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _env_bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    val = environ.get(key)
    if not val:
        return default
    val = val.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return default


@dataclass(frozen=True)
class ReplayConfig:
    """
    Settings for the Remove action.

    Fields:
        remove_missing_element_is_error: Removing an element that does not
            exist (or whose parent path does not resolve) fails
        remove_missing_array_element_is_error: Removing first/last from an
            empty array fails
    """
    remove_missing_element_is_error: bool = True
    remove_missing_array_element_is_error: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReplayConfig":
        """Build a config from environment variables, keeping defaults for unset ones."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            remove_missing_element_is_error=_env_bool(
                env, ENV_REMOVE_MISSING_ELEMENT, defaults.remove_missing_element_is_error
            ),
            remove_missing_array_element_is_error=_env_bool(
                env,
                ENV_REMOVE_MISSING_ARRAY_ELEMENT,
                defaults.remove_missing_array_element_is_error,
            ),
        )

    def with_overrides(self, **changes: Any) -> "ReplayConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_CONFIG = ReplayConfig()
