"""Exception classes for monikers.

The recognizers never raise: structural mismatches are reported as
BlockState values and soft problems go to a DiagnosticSink. These
exceptions cover misuse of the host-side API.
"""

from __future__ import annotations


class MonikersError(Exception):
    """Base exception for all monikers errors."""

    pass


class ScanError(MonikersError):
    """Error raised by the host scanner for input it cannot process."""

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize scan error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class BlockStateError(MonikersError):
    """Raised when a finished block is mutated.

    Blocks are frozen once closed; only an open block accepts span
    updates and content lines.
    """

    def __init__(self, block_type: str, status: str) -> None:
        self.block_type = block_type
        self.status = status
        super().__init__(f"{block_type} is {status.lower()} and can no longer be modified")


class RegistryError(MonikersError):
    """Error when registering a block parser.

    Raised for parsers without opening characters or with trigger
    characters that can never start a line.
    """

    def __init__(self, parser_name: str, message: str) -> None:
        self.parser_name = parser_name
        super().__init__(f"Block parser '{parser_name}': {message}")
