"""Line-by-line block scanner.

Drives block recognizers over a document one raw line at a time and
assembles the resulting blocks.

Architecture:
- Each line gets a LineProcessor (indent, cursor, blank/code flags)
- While a block is open, its recognizer decides whether the line
  continues or closes it; continuation lines become block content
- Otherwise the first significant character selects recognizers from
  the BlockParserRegistry, tried in priority order
- Lines nobody claims are grouped into ParagraphBlocks
- Blocks still open at the end of the document are marked UNTERMINATED

Thread Safety:
- BlockScanner keeps per-scan state in locals; an instance may be reused
- Configuration is read from ContextVar (thread-local)

"""

from __future__ import annotations

from collections.abc import Iterator

from monikers.blocks import Block, BlockState, Document, ParagraphBlock
from monikers.config import ScanConfig, get_scan_config
from monikers.diagnostics import LoggerSink
from monikers.errors import ScanError
from monikers.location import SourceSpan
from monikers.processor import LineProcessor
from monikers.protocols import BlockParser, DiagnosticSink
from monikers.registry import BlockParserRegistry, create_default_registry
from monikers.utils.logger import get_logger

logger = get_logger(__name__)

ESCAPE = "\\"


def iter_lines(source: str) -> Iterator[tuple[int, int, str]]:
    """Split source into lines.

    A trailing newline does not start an extra empty line, and a ``\\r``
    before the newline is dropped from the line text.

    Yields:
        (lineno, absolute_start, text) with 1-indexed line numbers
    """
    pos = 0
    lineno = 1
    source_len = len(source)
    while pos < source_len:
        line_end = source.find("\n", pos)
        if line_end == -1:
            line_end = source_len
        text = source[pos:line_end]
        if text.endswith("\r"):
            text = text[:-1]
        yield lineno, pos, text
        pos = line_end + 1
        lineno += 1


class BlockScanner:
    """Scanner that turns source text into a Document of blocks.

    Usage:
            >>> scanner = BlockScanner()
            >>> doc = scanner.scan(':::moniker range="v1"\\nHello\\n:::moniker-end')
            >>> doc.children[0].moniker_range
            'v1'

    """

    __slots__ = ("_registry", "_sink", "_source_file")

    def __init__(
        self,
        registry: BlockParserRegistry | None = None,
        sink: DiagnosticSink | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize scanner.

        Args:
            registry: Recognizers to dispatch to; defaults to the built-in
                set wired to ``sink``
            sink: Receiver for diagnostics raised by the scanner itself
            source_file: Optional source file path for diagnostics
        """
        self._sink: DiagnosticSink = sink if sink is not None else LoggerSink()
        self._registry = registry if registry is not None else create_default_registry(self._sink)
        self._source_file = source_file

    @property
    def registry(self) -> BlockParserRegistry:
        return self._registry

    def scan(self, source: str) -> Document:
        """Scan source text into blocks.

        Args:
            source: Document text

        Returns:
            Document with top-level blocks in source order

        Raises:
            TypeError: If source is not a string
        """
        if not isinstance(source, str):
            msg = f"source must be str, not {type(source).__name__}"
            raise TypeError(msg)

        config = get_scan_config()
        children: list[Block] = []
        stack: list[tuple[BlockParser, Block]] = []
        paragraph: ParagraphBlock | None = None

        for lineno, start, text in iter_lines(source):
            processor = LineProcessor(
                text, start, lineno, source_file=self._source_file, config=config
            )

            if stack and self._continue_block(processor, stack):
                continue

            if self._try_open(processor, stack):
                if paragraph is not None:
                    paragraph.close()
                    paragraph = None
                children.extend(processor.new_blocks)
                continue

            if processor.is_blank_line:
                if paragraph is not None:
                    paragraph.close()
                    paragraph = None
                continue

            if paragraph is None:
                paragraph = ParagraphBlock(
                    span=SourceSpan(start=start, end=processor.line_end, lineno=lineno),
                    lines=[text],
                )
                children.append(paragraph)
            else:
                paragraph.append_line(text)
                paragraph.update_span_end(processor.line_end, lineno)

        if paragraph is not None:
            paragraph.close()
        self._finish(stack, config)

        return Document(children=tuple(children), source_file=self._source_file)

    def _continue_block(
        self, processor: LineProcessor, stack: list[tuple[BlockParser, Block]]
    ) -> bool:
        """Offer the line to the innermost open block.

        Returns:
            True if the line was consumed by the block
        """
        parser, block = stack[-1]
        origin = processor.line.start
        state = parser.try_continue(processor, block)

        if state is BlockState.BREAK_DISCARD:
            block.close()
            stack.pop()
            logger.debug("Closed %s at line %d", type(block).__name__, processor.lineno)
            return True

        if state is BlockState.CONTINUE:
            block.append_line(processor.text)
            return True

        if state is BlockState.CONTINUE_DISCARD:
            return True

        # NONE: the block ends here and the line is offered to other recognizers
        block.close()
        stack.pop()
        processor.reset_cursor(origin)
        return False

    def _try_open(self, processor: LineProcessor, stack: list[tuple[BlockParser, Block]]) -> bool:
        """Offer the line to the recognizers registered for its trigger character.

        Returns:
            True if a recognizer opened one or more blocks
        """
        line = processor.line
        origin = line.start

        # Step over a single escape so recognizers can see it was escaped;
        # a second backslash leaves a literal backslash as the first character
        char = line.current_char
        if char == ESCAPE:
            char = line.next_char()

        parsers = self._registry.get(char)
        trigger = line.start
        for parser in parsers:
            processor.reset_cursor(trigger)
            state = parser.try_open(processor)
            if state is BlockState.NONE:
                processor.new_blocks.clear()
                continue
            if not processor.new_blocks:
                raise ScanError(
                    f"{type(parser).__name__} returned {state.name} without opening a block",
                    lineno=processor.lineno,
                    source_file=self._source_file,
                )
            for block in processor.new_blocks:
                stack.append((parser, block))
                logger.debug("Opened %s at line %d", type(block).__name__, processor.lineno)
            return True

        processor.reset_cursor(origin)
        return False

    def _finish(self, stack: list[tuple[BlockParser, Block]], config: ScanConfig) -> None:
        """Force-close blocks left open at the end of the document."""
        while stack:
            _, block = stack.pop()
            block.mark_unterminated()
            if config.warn_unterminated:
                self._sink.warning(
                    f"unterminated block opened on line {block.span.lineno}",
                    lineno=block.span.lineno,
                    source_file=self._source_file,
                )


def scan(
    source: str,
    *,
    sink: DiagnosticSink | None = None,
    source_file: str | None = None,
) -> Document:
    """Scan source text with the built-in recognizers.

    Args:
        source: Document text
        sink: Receiver for diagnostics (defaults to logging)
        source_file: Optional source file path for diagnostics

    Returns:
        Document with top-level blocks in source order
    """
    return BlockScanner(sink=sink, source_file=source_file).scan(source)
