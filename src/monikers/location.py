"""Source span tracking for blocks and diagnostics.

Thread Safety:
SourceSpan is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Extent of a block in the source buffer.

    Offsets are absolute character positions; ``end`` is exclusive and
    never includes the line terminator. Line numbers are 1-indexed.

    Examples:
        >>> span = SourceSpan(start=0, end=22, lineno=1)
        >>> span.with_end(40, 3)
        SourceSpan(start=0, end=40, lineno=1, end_lineno=3)
    """

    start: int
    end: int
    lineno: int
    end_lineno: int | None = None

    def __post_init__(self) -> None:
        if self.end_lineno is None:
            object.__setattr__(self, "end_lineno", self.lineno)

    def __str__(self) -> str:
        if self.end_lineno == self.lineno:
            return f"{self.lineno}"
        return f"{self.lineno}-{self.end_lineno}"

    def __len__(self) -> int:
        return self.end - self.start

    def with_end(self, end: int, end_lineno: int) -> SourceSpan:
        """Create a new span with the same start and a new end.

        Args:
            end: Absolute exclusive end offset
            end_lineno: Line number of the line containing ``end``

        Returns:
            New SourceSpan
        """
        return SourceSpan(
            start=self.start,
            end=end,
            lineno=self.lineno,
            end_lineno=end_lineno,
        )
