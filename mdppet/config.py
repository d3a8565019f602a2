from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("mdppet")


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class ScannerConfig:
    """Markers recognised by the record scanner."""

    heading_marker: str = "#"
    field_separator: str = "/"
    fence_marker: str = "```"

    def __post_init__(self) -> None:
        for name in ("heading_marker", "field_separator", "fence_marker"):
            if not getattr(self, name):
                raise ValueError(f"{name} must be a non-empty string")

    @classmethod
    def from_env(cls) -> "ScannerConfig":
        return cls(
            heading_marker=os.getenv("MDPPET_HEADING_MARKER") or "#",
            field_separator=os.getenv("MDPPET_FIELD_SEPARATOR") or "/",
            fence_marker=os.getenv("MDPPET_FENCE_MARKER") or "```",
        )


@dataclass(slots=True)
class OutputConfig:
    """JSON rendering options. ``indent=None`` renders compact output."""

    indent: int | None = 2
    ensure_ascii: bool = False

    @classmethod
    def from_env(cls) -> "OutputConfig":
        def _indent_env(name: str, default: int | None) -> int | None:
            raw = os.getenv(name)
            if raw is None:
                return default
            if not raw.strip() or raw.strip().lower() == "none":
                return None
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        return cls(
            indent=_indent_env("MDPPET_INDENT", 2),
            ensure_ascii=_bool_env("MDPPET_ENSURE_ASCII", False),
        )


__all__ = ["ScannerConfig", "OutputConfig"]
