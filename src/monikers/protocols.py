"""Protocols for monikers.

Defines the contracts between the line scanner and the pluggable pieces
it drives: block recognizers and diagnostic sinks. Recognizers satisfy
BlockParser structurally; no base class is required.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from monikers.blocks import Block, BlockState
    from monikers.processor import LineProcessor


class BlockParser(Protocol):
    """Recognizer for one block syntax.

    The scanner offers a line to ``try_open`` when the line's first
    significant character is one of ``opening_characters``, and offers
    every following line to ``try_continue`` while the block it opened
    is on top of the open-block stack.

    Thread Safety:
        Implementations must not keep per-scan state on the instance.
        Everything line-specific arrives through the processor.

    """

    opening_characters: tuple[str, ...]

    def try_open(self, processor: LineProcessor) -> BlockState:
        """Try to open a block on the current line.

        On success the new block is pushed on ``processor.new_blocks``.

        Returns:
            BlockState.NONE when the line does not open a block.
        """
        ...

    def try_continue(self, processor: LineProcessor, block: Block) -> BlockState:
        """Decide whether the current line continues or closes ``block``."""
        ...


class DiagnosticSink(Protocol):
    """Receiver for non-fatal problems found while scanning.

    Fire-and-forget: callers never inspect a return value.
    """

    def warning(
        self,
        message: str,
        *,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        ...
