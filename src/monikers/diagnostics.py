"""Diagnostic sinks for non-fatal scan problems.

Recognizers report recoverable problems (trailing characters after a
complete opening or closing line) to an injected DiagnosticSink rather
than to a global logger, so callers decide where warnings go.

Sinks:
- LoggerSink: forwards to the ``monikers.diagnostics`` logger (default)
- CollectingSink: keeps Diagnostic records in memory

Example:
    >>> sink = CollectingSink()
    >>> doc = scan(':::moniker range="v1" extra', sink=sink)
    >>> sink.messages
    ['invalid trailing characters on opening line']

"""

from __future__ import annotations

from dataclasses import dataclass

from monikers.utils.logger import get_logger


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reported problem.

    Attributes:
        message: Human-readable description
        lineno: Line number (1-indexed) the problem was found on
        source_file: Path of the scanned file (optional)

    """

    message: str
    lineno: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        location = ""
        if self.source_file:
            location = f"{self.source_file}:"
        if self.lineno is not None:
            location += f"{self.lineno}:"
        if location:
            return f"{location} {self.message}"
        return self.message


class LoggerSink:
    """Sink that logs each diagnostic as a warning."""

    __slots__ = ("_logger",)

    def __init__(self, name: str = "diagnostics") -> None:
        self._logger = get_logger(name)

    def warning(
        self,
        message: str,
        *,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self._logger.warning("%s", Diagnostic(message, lineno, source_file))


class CollectingSink:
    """Sink that stores diagnostics for later inspection.

    Useful in tests and in tools that report problems in bulk.
    """

    __slots__ = ("diagnostics",)

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def warning(
        self,
        message: str,
        *,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.diagnostics.append(Diagnostic(message, lineno, source_file))

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()

    def __len__(self) -> int:
        return len(self.diagnostics)
