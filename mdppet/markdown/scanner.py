"""Line-oriented scanner that splits a snippet document into raw records.

A record is a heading line ``# identifier/prefix[/scope]``, an optional
description paragraph and a fenced code block. The scanner walks the lines
once, driven by an explicit :class:`ScanState`; text inside a code block is
always body text, even when it looks like a heading.
"""
from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..config import ScannerConfig
from ..errors import MalformedRecord, UnterminatedFence

logger = logging.getLogger("mdppet")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ScanState(enum.Enum):
    SEEKING = "seeking"
    IN_HEADING = "in_heading"
    IN_DESCRIPTION = "in_description"
    IN_FENCE = "in_fence"


@dataclass(slots=True)
class RawRecord:
    """Fields of one snippet exactly as captured from the document."""

    heading_fields: Tuple[str, str, str]
    description_lines: List[str] = field(default_factory=list)
    body_lines: List[str] = field(default_factory=list)
    line: int = 0
    source: str | None = None

    @property
    def identifier(self) -> str:
        return self.heading_fields[0]

    @property
    def prefix(self) -> str:
        return self.heading_fields[1]

    @property
    def scope(self) -> str:
        return self.heading_fields[2]


class RecordScanner:
    """Single-pass state machine over document lines."""

    def __init__(self, config: ScannerConfig | None = None, *, source: str | None = None) -> None:
        self.config = config or ScannerConfig()
        self.source = source

        marker = re.escape(self.config.heading_marker)
        fence = re.escape(self.config.fence_marker)
        self._heading_re = re.compile(rf"^{marker}\s+(?P<fields>.*)$")
        self._fence_open_re = re.compile(rf"^{fence}[ \t]*(?P<lang>[^\s`~]*)[ \t]*$")
        self._fence_close_re = re.compile(rf"^{fence}[ \t]*$")

        self._handlers: Dict[ScanState, Callable[[int, str], Optional[RawRecord]]] = {
            ScanState.SEEKING: self._on_seeking,
            ScanState.IN_HEADING: self._on_heading,
            ScanState.IN_DESCRIPTION: self._on_description,
            ScanState.IN_FENCE: self._on_fence,
        }
        self._reset()

    def _reset(self) -> None:
        self.state = ScanState.SEEKING
        self._current: RawRecord | None = None
        self._fence_line = 0

    def scan(self, lines: Iterable[str]) -> List[RawRecord]:
        self._reset()
        records: List[RawRecord] = []
        lineno = 0
        for lineno, line in enumerate(lines, start=1):
            record = self._handlers[self.state](lineno, line)
            if record is not None:
                records.append(record)
        self._finish()
        logger.debug("Scanned %d lines into %d records", lineno, len(records))
        return records

    # -- state handlers -------------------------------------------------

    def _on_seeking(self, lineno: int, line: str) -> Optional[RawRecord]:
        if not line.strip():
            return None
        heading = self._match_heading(line)
        if heading is not None:
            self._start_record(lineno, heading)
        elif self._fence_open_re.match(line):
            raise MalformedRecord(
                lineno, "code block has no preceding snippet heading", source=self.source
            )
        else:
            logger.debug("Ignoring text outside of a snippet at line %d", lineno)
        return None

    def _on_heading(self, lineno: int, line: str) -> Optional[RawRecord]:
        if not line.strip():
            return None
        if self._fence_open_re.match(line):
            self._open_fence(lineno, line)
            return None
        if self._match_heading(line) is not None:
            self._missing_fence()
        self._current.description_lines.append(line)
        self.state = ScanState.IN_DESCRIPTION
        return None

    def _on_description(self, lineno: int, line: str) -> Optional[RawRecord]:
        if self._fence_open_re.match(line):
            lines = self._current.description_lines
            while lines and not lines[-1]:
                lines.pop()
            self._open_fence(lineno, line)
            return None
        if self._match_heading(line) is not None:
            self._missing_fence()
        self._current.description_lines.append(line if line.strip() else "")
        return None

    def _on_fence(self, lineno: int, line: str) -> Optional[RawRecord]:
        if self._fence_close_re.match(line):
            record = self._current
            logger.debug(
                "Closed snippet %r (lines %d-%d)", record.identifier, record.line, lineno
            )
            self._current = None
            self.state = ScanState.SEEKING
            return record
        self._current.body_lines.append(line)
        return None

    # -- helpers ----------------------------------------------------------

    def _match_heading(self, line: str) -> Optional[str]:
        match = self._heading_re.match(line.strip())
        if match is None:
            return None
        return match.group("fields")

    def _start_record(self, lineno: int, text: str) -> None:
        self._current = RawRecord(
            heading_fields=self._split_fields(lineno, text),
            line=lineno,
            source=self.source,
        )
        self.state = ScanState.IN_HEADING

    def _split_fields(self, lineno: int, text: str) -> Tuple[str, str, str]:
        separator = self.config.field_separator
        parts = [part.strip() for part in text.split(separator)]
        if len(parts) < 2:
            raise MalformedRecord(
                lineno,
                f"expected 'identifier{separator}prefix[{separator}scope]' in heading, "
                f"got {text.strip()!r}",
                source=self.source,
            )
        if len(parts) > 3:
            raise MalformedRecord(
                lineno,
                f"heading has {len(parts)} '{separator}'-separated fields, at most 3 allowed",
                source=self.source,
            )
        if not parts[0]:
            raise MalformedRecord(lineno, "heading has an empty identifier", source=self.source)
        if not parts[1]:
            raise MalformedRecord(lineno, "heading has an empty prefix", source=self.source)
        scope = parts[2] if len(parts) == 3 else ""
        return parts[0], parts[1], scope

    def _open_fence(self, lineno: int, line: str) -> None:
        self._fence_line = lineno
        self.state = ScanState.IN_FENCE
        lang = self._fence_open_re.match(line).group("lang")
        logger.debug(
            "Code block for %r opened at line %d (%s)",
            self._current.identifier,
            lineno,
            lang or "no language",
        )

    def _missing_fence(self) -> None:
        raise MalformedRecord(
            self._current.line,
            f"snippet {self._current.identifier!r} has no code block before the next heading",
            source=self.source,
        )

    def _finish(self) -> None:
        if self.state is ScanState.IN_FENCE:
            raise UnterminatedFence(self._fence_line, source=self.source)
        if self.state in (ScanState.IN_HEADING, ScanState.IN_DESCRIPTION):
            raise MalformedRecord(
                self._current.line,
                f"snippet {self._current.identifier!r} reaches end of input without a code block",
                source=self.source,
            )


def split_lines(text: str) -> List[str]:
    """Split on \\n, \\r\\n and \\r only; other separators such as form feed
    or U+2028 stay inside the line."""
    lines = _LINE_BREAK.split(text)
    if lines and not lines[-1]:
        lines.pop()
    return lines


def scan_lines(
    lines: Iterable[str],
    config: ScannerConfig | None = None,
    *,
    source: str | None = None,
) -> List[RawRecord]:
    """Split document lines into raw records."""
    return RecordScanner(config, source=source).scan(lines)


def scan_text(
    text: str,
    config: ScannerConfig | None = None,
    *,
    source: str | None = None,
) -> List[RawRecord]:
    """Split a whole document into raw records. Any line ending is accepted."""
    return scan_lines(split_lines(text), config, source=source)


__all__ = ["ScanState", "RawRecord", "RecordScanner", "split_lines", "scan_lines", "scan_text"]
