"""Block records produced by the line scanner.

Block Hierarchy:
Block (base, mutable while open)
├── MonikerRangeBlock   :::moniker range="..." ... :::moniker-end
└── ParagraphBlock      lines no recognizer claimed

Blocks are mutable only while they are open. The scanner owns the open
block stack and is the only writer; once a block is closed its span and
content are frozen.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from monikers.errors import BlockStateError
from monikers.location import SourceSpan

if TYPE_CHECKING:
    from monikers.protocols import BlockParser


class BlockState(Enum):
    """Signals a recognizer returns to the scanner for one line.

    - NONE: Not applicable; the scanner tries other recognizers
    - CONTINUE: The line belongs to the open block as content
    - CONTINUE_DISCARD: Block opened/continued; rest of the line is consumed
    - BREAK_DISCARD: Block closed; rest of the line is consumed

    """

    NONE = auto()
    CONTINUE = auto()
    CONTINUE_DISCARD = auto()
    BREAK_DISCARD = auto()


class BlockStatus(Enum):
    """Lifecycle of a block record."""

    OPEN = auto()  # Accepting content lines
    CLOSED = auto()  # Explicitly closed by its recognizer
    UNTERMINATED = auto()  # Force-closed by the scanner at end of document


@dataclass(slots=True, kw_only=True)
class Block:
    """Base record for all blocks.

    Attributes:
        span: Source extent; the end moves only while the block is open
        status: Lifecycle state
        lines: Raw content lines

    """

    span: SourceSpan
    status: BlockStatus = BlockStatus.OPEN
    lines: list[str] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.status is BlockStatus.OPEN

    def _check_open(self) -> None:
        if self.status is not BlockStatus.OPEN:
            raise BlockStateError(type(self).__name__, self.status.name)

    def append_line(self, line: str) -> None:
        self._check_open()
        self.lines.append(line)

    @property
    def content(self) -> str:
        """Content lines joined with newlines."""
        return "\n".join(self.lines)

    def update_span_end(self, end: int, end_lineno: int) -> None:
        """Extend the span to ``end`` (exclusive offset on line ``end_lineno``)."""
        self._check_open()
        self.span = self.span.with_end(end, end_lineno)

    def close(self) -> None:
        """Finalize the block after an explicit closing line."""
        self._check_open()
        self.status = BlockStatus.CLOSED

    def mark_unterminated(self) -> None:
        """Finalize the block when the document ends before its closing line.

        The span is left as it was; for a block that never saw a closing
        line that is the end of its opening line.
        """
        self._check_open()
        self.status = BlockStatus.UNTERMINATED


@dataclass(slots=True, kw_only=True)
class MonikerRangeBlock(Block):
    """A moniker range region.

    Markdown:
        :::moniker range="netcore-3.0"
        Content
        :::moniker-end

    Attributes:
        moniker_range: Raw text between the quotes of ``range="..."``
        colon_count: Colons that opened the block (3 or more)
        column: Column at which the opening colons began
        parser: Recognizer that opened the block and decides its end

    """

    moniker_range: str
    colon_count: int
    column: int = 0
    parser: BlockParser | None = field(default=None, repr=False, compare=False)


@dataclass(slots=True, kw_only=True)
class ParagraphBlock(Block):
    """Run of consecutive non-blank lines that no recognizer claimed."""


@dataclass(frozen=True, slots=True)
class Document:
    """Result of scanning one source text.

    Attributes:
        children: Top-level blocks in source order
        source_file: Path of the scanned file (optional)

    """

    children: tuple[Block, ...]
    source_file: str | None = None

    @property
    def monikers(self) -> tuple[MonikerRangeBlock, ...]:
        """All moniker range blocks in source order."""
        return tuple(b for b in self.children if isinstance(b, MonikerRangeBlock))
