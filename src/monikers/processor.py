"""Per-line state handed to block recognizers.

The scanner builds one LineProcessor per source line. It measures the
line's indentation, places the slice cursor on the first significant
character and collects blocks opened on the line.

"""

from __future__ import annotations

from monikers.blocks import Block
from monikers.config import ScanConfig, get_scan_config
from monikers.slice import StringSlice


def calc_indent(line: str, tab_stop: int = 4) -> tuple[int, int]:
    """Calculate indent level and content start position.

    Spaces count as 1, tabs expand to the next multiple of ``tab_stop``.

    Args:
        line: Line content
        tab_stop: Tab width in columns

    Returns:
        (indent_columns, content_start_index)
    """
    indent = 0
    pos = 0
    line_len = len(line)
    while pos < line_len:
        char = line[pos]
        if char == " ":
            indent += 1
            pos += 1
        elif char == "\t":
            indent += tab_stop - (indent % tab_stop)
            pos += 1
        else:
            break
    return indent, pos


class LineProcessor:
    """View of the current line for recognizers.

    Attributes:
        line: Cursor positioned on the first non-indent character
        start: Absolute source offset of the start of the line
        lineno: Line number (1-indexed)
        indent: Indentation in columns
        column: Column of the first significant character
        source_file: Path of the scanned file (optional)
        new_blocks: Blocks opened on this line, in push order

    """

    __slots__ = (
        "line",
        "start",
        "lineno",
        "indent",
        "column",
        "source_file",
        "new_blocks",
        "is_code_indent",
        "is_blank_line",
        "_text",
    )

    def __init__(
        self,
        text: str,
        start: int,
        lineno: int,
        *,
        source_file: str | None = None,
        config: ScanConfig | None = None,
    ) -> None:
        if config is None:
            config = get_scan_config()
        indent, content_start = calc_indent(text, config.tab_stop)

        self._text = text
        self.line = StringSlice(text, start=content_start, position=start)
        self.start = start
        self.lineno = lineno
        self.indent = indent
        self.column = indent
        self.source_file = source_file
        self.new_blocks: list[Block] = []
        self.is_blank_line = content_start == len(text)
        self.is_code_indent = not self.is_blank_line and indent >= config.code_indent_width

    @property
    def text(self) -> str:
        """The raw line without its terminator."""
        return self._text

    @property
    def line_end(self) -> int:
        """Absolute exclusive offset of the end of the line."""
        return self.start + len(self._text)

    def reset_cursor(self, index: int) -> None:
        """Move the line cursor back to ``index`` after a failed attempt."""
        self.line.start = index

    def __repr__(self) -> str:
        return f"LineProcessor(lineno={self.lineno}, line={self._text!r})"
