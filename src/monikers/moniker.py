"""Moniker range block recognizer.

Recognizes version-scoped regions fenced with colons:

    :::moniker range="netcore-3.0 || netcore-3.1"
    Content for the selected versions
    :::moniker-end

The fence may use any number of colons (at least three); the closing
line must repeat the opening count. The ``range`` value is captured
verbatim and never interpreted.

Recognition is permissive once the grammar is satisfied: trailing text
after a complete opening or closing line is reported to the diagnostic
sink, and the block is still opened or closed. Anything short of the
grammar is a silent non-match.

"""

from __future__ import annotations

from monikers.blocks import Block, BlockState, MonikerRangeBlock
from monikers.config import get_scan_config
from monikers.diagnostics import LoggerSink
from monikers.location import SourceSpan
from monikers.processor import LineProcessor
from monikers.protocols import DiagnosticSink
from monikers.slice import SPACE_OR_TAB, StringSlice

COLON = ":"
MIN_COLONS = 3
START_KEYWORD = "moniker"
RANGE_ATTRIBUTE = 'range="'
END_KEYWORD = "moniker-end"

TRAILING_OPEN_MESSAGE = "invalid trailing characters on opening line"
TRAILING_END_MESSAGE = "invalid trailing characters on ending line"


def skip_spaces_or_tabs(line: StringSlice) -> str:
    """Advance past spaces and tabs; return the character now at the cursor.

    Only space and tab are skipped. Returns END at the end of the line.
    """
    c = line.current_char
    while c in SPACE_OR_TAB:
        c = line.next_char()
    return c


class MonikerRangeParser:
    """Block recognizer for ``:::moniker range="..."`` regions.

    Thread Safety:
        Holds only the injected sink; safe to share between scanners
        when the sink is.
    """

    __slots__ = ("_sink",)

    opening_characters: tuple[str, ...] = (COLON,)

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self._sink: DiagnosticSink = sink if sink is not None else LoggerSink()

    @property
    def sink(self) -> DiagnosticSink:
        return self._sink

    def try_open(self, processor: LineProcessor) -> BlockState:
        if processor.is_code_indent:
            return BlockState.NONE

        config = get_scan_config()
        line = processor.line
        if config.honor_escapes and line.is_escaped():
            return BlockState.NONE

        column = processor.column
        colon_count = 0
        c = line.current_char
        while c == COLON:
            c = line.next_char()
            colon_count += 1

        if colon_count < MIN_COLONS:
            return BlockState.NONE

        case_sensitive = config.case_sensitive_keywords
        skip_spaces_or_tabs(line)
        if not line.match_start(START_KEYWORD, case_sensitive):
            return BlockState.NONE

        skip_spaces_or_tabs(line)
        if not line.match_start(RANGE_ATTRIBUTE, case_sensitive):
            return BlockState.NONE

        range_start = line.start
        c = line.current_char
        while c != '"':
            if line.is_empty:
                # Unterminated quote
                return BlockState.NONE
            c = line.next_char()
        moniker_range = line.text[range_start : line.start]

        line.next_char()
        skip_spaces_or_tabs(line)
        if not line.is_empty:
            self._warn(TRAILING_OPEN_MESSAGE, processor)

        processor.new_blocks.append(
            MonikerRangeBlock(
                span=SourceSpan(
                    start=processor.start,
                    end=line.absolute_end,
                    lineno=processor.lineno,
                ),
                moniker_range=moniker_range,
                colon_count=colon_count,
                column=column,
                parser=self,
            )
        )
        return BlockState.CONTINUE_DISCARD

    def try_continue(self, processor: LineProcessor, block: Block) -> BlockState:
        if processor.is_blank_line:
            return BlockState.CONTINUE

        if not isinstance(block, MonikerRangeBlock):
            return BlockState.NONE
        case_sensitive = get_scan_config().case_sensitive_keywords
        line = processor.line

        skip_spaces_or_tabs(line)
        if not line.match_start(COLON * block.colon_count):
            return BlockState.CONTINUE

        # The fence check is a prefix compare, so a longer colon run also
        # closes the block; its surplus colons are not part of the keyword.
        c = line.current_char
        while c == COLON:
            c = line.next_char()

        skip_spaces_or_tabs(line)
        if not line.match_start(END_KEYWORD, case_sensitive):
            return BlockState.CONTINUE

        skip_spaces_or_tabs(line)
        if not line.is_empty:
            self._warn(TRAILING_END_MESSAGE, processor)

        block.update_span_end(line.absolute_end, processor.lineno)
        return BlockState.BREAK_DISCARD

    def _warn(self, message: str, processor: LineProcessor) -> None:
        self._sink.warning(
            message,
            lineno=processor.lineno,
            source_file=processor.source_file,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sink={type(self._sink).__name__})"
