# src/hl7_parse_tool/config.py
"""
Configuration utilities for hl7_parse_tool.

Provides a simple dataclass-based configuration object, a loader that reads
YAML configuration files when present, and a hook that registers site-specific
segment field names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import logging

import yaml

from .segment_fields import register_all, validate_fields


LOG = logging.getLogger(__name__)

DEFAULT_DETAIL_KEYS: Tuple[str, ...] = (
    "id",
    "type",
    "date",
    "pt_name",
    "pt_acct",
    "dob",
    "proc_name",
    "proc_date",
    "visit",
)


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Attributes
    ----------
    date_delimiter : str
        Delimiter used when rendering dates in message details.
    detail_keys : Tuple[str, ...]
        Detail keys reported by Message.detail() when none are requested.
    segment_fields : Mapping[str, Mapping[str, int]]
        Extra field-name tables, usually for site-specific Z-segments.
        Registered by apply_config().
    """

    date_delimiter: str = "/"
    detail_keys: Tuple[str, ...] = DEFAULT_DETAIL_KEYS
    segment_fields: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: MappingProxyType({})
    )


def _read_segment_fields(raw: Any, path: Path) -> Mapping[str, Mapping[str, int]]:
    if raw is None:
        return MappingProxyType({})
    if not isinstance(raw, Mapping):
        raise TypeError(
            f"segment_fields must be a mapping, got {type(raw).__name__}. "
            f"Config file: {path}"
        )
    out: Dict[str, Mapping[str, int]] = {}
    for seg_type, table in raw.items():
        if not isinstance(table, Mapping):
            raise TypeError(
                f"segment_fields.{seg_type} must be a mapping, "
                f"got {type(table).__name__}. Config file: {path}"
            )
        try:
            checked = validate_fields(seg_type, table)
        except (TypeError, ValueError) as e:
            raise type(e)(f"segment_fields.{seg_type}: {e}. Config file: {path}") from e
        out[seg_type] = MappingProxyType(checked)
    return MappingProxyType(out)


def load_config(path: Optional[Path]) -> AppConfig:
    """
    Load application configuration from a YAML file.

    Parameters
    ----------
    path : Path or None
        Path to a YAML config file. If None, defaults are used.

    Returns
    -------
    AppConfig
        The loaded configuration.

    Raises
    ------
    TypeError
        If the YAML file does not parse to a mapping at the top level, or a
        value has the wrong type.
    ValueError
        If date_delimiter is empty or detail_keys is empty.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    if path is None:
        return AppConfig()

    data: Any = yaml.safe_load(path.read_text())

    if data is None:
        return AppConfig()

    if not isinstance(data, Mapping):
        raise TypeError(
            f"Config file must contain a mapping at top level, "
            f"got {type(data).__name__}. "
            f"Config file: {path}"
        )

    delim = data.get("date_delimiter", "/")
    if not isinstance(delim, str):
        raise TypeError(
            f"date_delimiter must be str, got {type(delim).__name__}. "
            f"Config file: {path}"
        )
    if delim == "":
        raise ValueError(f"date_delimiter must not be empty. Config file: {path}")

    keys = data.get("detail_keys", list(DEFAULT_DETAIL_KEYS))
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        raise TypeError(f"detail_keys must be a list of str. Config file: {path}")
    if not keys:
        raise ValueError(f"detail_keys must not be empty. Config file: {path}")

    return AppConfig(
        date_delimiter=delim,
        detail_keys=tuple(k.lower() for k in keys),
        segment_fields=_read_segment_fields(data.get("segment_fields"), path),
    )


def apply_config(cfg: AppConfig) -> None:
    """
    Register the configuration's extra segment field names.

    Call once at application startup, before parsing messages.

    Raises
    ------
    ValueError
        If a table is invalid or conflicts with one already registered. No
        table is registered in that case.
    """
    register_all(cfg.segment_fields)
    for seg_type, table in cfg.segment_fields.items():
        LOG.debug("Registered %d field name(s) for %s", len(table), seg_type)
