"""Conversion failures. Any of these aborts the whole run."""

from __future__ import annotations


class MdppetError(Exception):
    """Base class for conversion errors."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class MalformedRecord(MdppetError):
    """A snippet record could not be parsed."""

    def __init__(self, line: int, reason: str, *, source: str | None = None) -> None:
        super().__init__(f"line {line}: malformed record: {reason}", source=source)
        self.line = line
        self.reason = reason


class UnterminatedFence(MdppetError):
    """A code block was opened but never closed."""

    def __init__(self, line: int, *, source: str | None = None) -> None:
        super().__init__(
            f"line {line}: code block opened here is never closed", source=source
        )
        self.line = line


class ValidationError(MdppetError):
    """Two records share the same identifier."""

    def __init__(
        self,
        identifier: str,
        first_line: int,
        second_line: int,
        *,
        source: str | None = None,
        first_source: str | None = None,
    ) -> None:
        first = f"{first_source}:{first_line}" if first_source else f"line {first_line}"
        super().__init__(
            f"line {second_line}: duplicate identifier {identifier!r} "
            f"(first defined at {first})",
            source=source,
        )
        self.identifier = identifier
        self.first_line = first_line
        self.second_line = second_line
        self.first_source = first_source


__all__ = [
    "MdppetError",
    "MalformedRecord",
    "UnterminatedFence",
    "ValidationError",
]
