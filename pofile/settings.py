"""Typed serialization and catalog settings with Pydantic validation."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_FOLD_LENGTH = 80
DEFAULT_NPLURALS = 2


class SerializeOptions(BaseModel):
    """Options controlling how PO text is written.

    ``fold_length`` is the column budget for quoted lines (``0`` disables
    folding). ``compact_multiline`` puts the first segment of a multi-line
    value on the keyword line instead of GNU gettext's leading ``""``.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    fold_length: int = Field(DEFAULT_FOLD_LENGTH, ge=0, alias="foldLength")
    compact_multiline: bool = Field(True, alias="compactMultiline")

    @field_validator("fold_length", mode="before")
    @classmethod
    def _normalize_fold_length(cls, value: int | str | None) -> int | str:
        """Treat missing or blank fold lengths as the default."""
        if value is None:
            return DEFAULT_FOLD_LENGTH
        if isinstance(value, bool):
            raise ValueError("Boolean is not a valid fold length")
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return DEFAULT_FOLD_LENGTH
            return raw
        return value


DEFAULT_SERIALIZE_OPTIONS = SerializeOptions()


def resolve_serialize_options(
    options: SerializeOptions | Mapping[str, Any] | None,
) -> SerializeOptions:
    """Return a :class:`SerializeOptions` instance for *options*."""
    if options is None:
        return DEFAULT_SERIALIZE_OPTIONS
    if isinstance(options, SerializeOptions):
        return options
    return SerializeOptions.model_validate(dict(options))


class CatalogSettings(BaseModel):
    """Settings for converting between PO items and flat catalogs."""

    model_config = ConfigDict(validate_assignment=True)

    include_origins: bool = True
    include_line_numbers: bool = True
    nplurals: int = Field(DEFAULT_NPLURALS, ge=1)
    use_msgid_as_key: bool = True


class AppSettings(BaseModel):
    """Aggregate settings for the command-line tool."""

    model_config = ConfigDict(validate_assignment=True)

    serialize: SerializeOptions = Field(default_factory=SerializeOptions)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    log_level: int = Field(default=logging.WARNING)

    @field_validator("log_level", mode="before")
    @classmethod
    def _coerce_log_level(cls, value: int | str) -> int | str:
        """Accept level names such as ``"debug"`` as well as numbers."""
        if isinstance(value, str) and not value.strip().isdigit():
            level = logging.getLevelName(value.strip().upper())
            if isinstance(level, int):
                return level
        return value

    def to_dict(self) -> dict:
        """Return settings as a plain dictionary."""
        return self.model_dump()


def load_app_settings(path: str | Path) -> AppSettings:
    """Load :class:`AppSettings` from *path* with validation.

    Format is detected by file extension: ``.toml`` uses :mod:`tomllib`,
    everything else is treated as JSON.  Any validation errors are wrapped into
    :class:`ValueError` with a human-friendly message.
    """
    p = Path(path)
    with p.open("rb") as fh:
        data = tomllib.load(fh) if p.suffix.lower() == ".toml" else json.load(fh)
    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc
