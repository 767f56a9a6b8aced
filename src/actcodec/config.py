"""
Runtime configuration for actcodec entry points.

Defines CodecSettings, a frozen dataclass carrying decoder limits and output
preferences. Defaults are sourced from actcodec.core.constants (the single
source of truth).

Source of truth
- actcodec.core.constants.MAX_RLP_DEPTH, MAX_PAYLOAD_BYTES

Import DAG discipline
- Depends only on stdlib and actcodec.core.
- Library calls (`decode_action`) take limits as arguments; only the CLI and
  embedding hosts read settings.

Notes
- Precedence when loading: env > TOML > defaults.
- Loose loading ignores unparseable values; `validated()` rejects
  out-of-range ones with ConfigError.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .core.constants import MAX_PAYLOAD_BYTES as CORE_MAX_PAYLOAD_BYTES
from .core.constants import MAX_RLP_DEPTH as CORE_MAX_RLP_DEPTH
from .core.errors import ConfigError

__all__ = ["CodecSettings"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class CodecSettings:
    """
    Runtime settings for decoding and presenting actions.

    Attributes:
        max_depth (int): Deepest RLP list nesting accepted by the decoder
            (1..MAX_RLP_DEPTH; default from actcodec.core.constants).
        max_payload_bytes (int): Largest encoded action accepted (>= 1).
        log_level (str): Logging level name applied by the CLI.
        hex_prefix (bool): If True, hex output carries a "0x" prefix.

    Examples:
        >>> from actcodec.config import CodecSettings
        >>> CodecSettings(max_depth=8).max_depth
        8
    """

    max_depth: int = CORE_MAX_RLP_DEPTH
    max_payload_bytes: int = CORE_MAX_PAYLOAD_BYTES
    log_level: str = "WARNING"
    hex_prefix: bool = True

    def validated(self) -> CodecSettings:
        """
        Return self after range checks.

        Raises:
            ConfigError: If any field is out of range.
        """
        if not 1 <= self.max_depth <= CORE_MAX_RLP_DEPTH:
            raise ConfigError(
                f"max_depth must be in 1..{CORE_MAX_RLP_DEPTH}, got {self.max_depth}"
            )
        if self.max_payload_bytes < 1:
            raise ConfigError(f"max_payload_bytes must be >= 1, got {self.max_payload_bytes}")
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {list(_LOG_LEVELS)}, got {self.log_level!r}")
        return self

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: CodecSettings, cfg: dict[str, Any] | None) -> CodecSettings:
        """Apply a loose config mapping onto CodecSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "max_depth" in cfg:
            try:
                s = replace(s, max_depth=int(cfg["max_depth"]))
            except (TypeError, ValueError):
                pass

        if "max_payload_bytes" in cfg:
            try:
                s = replace(s, max_payload_bytes=int(cfg["max_payload_bytes"]))
            except (TypeError, ValueError):
                pass

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        if "hex_prefix" in cfg:
            s = replace(s, hex_prefix=_bool(cfg["hex_prefix"]))

        return s

    @classmethod
    def from_env(cls, base: CodecSettings | None = None, prefix: str = "ACTCODEC_") -> CodecSettings:
        """
        Build CodecSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - ACTCODEC_MAX_DEPTH
            - ACTCODEC_MAX_PAYLOAD_BYTES
            - ACTCODEC_LOG_LEVEL (DEBUG/INFO/WARNING/ERROR/CRITICAL)
            - ACTCODEC_HEX_PREFIX (1/0/true/false/yes/no/on/off)
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("max_depth", "max_payload_bytes", "log_level", "hex_prefix"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> CodecSettings:
        """
        Build CodecSettings from a TOML file.

        Search order when `path` is None:
            1) ./actcodec.toml (with either a [codec] table or top-level keys)
            2) ./pyproject.toml under [tool.actcodec]

        Returns defaults if no file is present or none parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "actcodec.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("actcodec") if isinstance(tool, dict) else None
            elif isinstance(data.get("codec"), dict):
                cfg = data["codec"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> CodecSettings:
        """
        Load CodecSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (actcodec.toml, pyproject.toml).

        Returns:
            CodecSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
