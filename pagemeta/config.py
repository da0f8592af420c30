"""Pipeline-scoped configuration shared between extraction stages."""

from __future__ import annotations

import os
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_LANGUAGE = "en"

_ENV_PREFIX = "PAGEMETA_"
_LANGUAGE_RE = re.compile(r"^[A-Za-z]{2}$")


class Configuration(BaseModel):
    """Mutable settings read and written by pipeline stages.

    One instance belongs to one pipeline run.  Stages write back into it
    (the metadata stage stores the detected ``language`` so later stages
    see it), last writer wins.  Workers extracting in parallel must each
    hold their own instance.

    Keys other than the declared fields are accepted and kept as extras.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    language: str = DEFAULT_LANGUAGE

    @field_validator("language", mode="before")
    @classmethod
    def normalise_language(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not _LANGUAGE_RE.match(v):
                raise ValueError(f"language must be a two-letter code, got {v!r}")
            return v.lower()
        return v

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default*."""
        if key in type(self).model_fields:
            return getattr(self, key)
        return (self.model_extra or {}).get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* (validated for declared fields)."""
        setattr(self, key, value)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Configuration:
        """Build a configuration from ``PAGEMETA_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name, value in env.items():
            if name.startswith(_ENV_PREFIX) and value:
                values[name[len(_ENV_PREFIX):].lower()] = value
        return cls(**values)
