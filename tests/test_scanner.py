"""End-to-end tests for BlockScanner and scan()."""

import pytest

from monikers import (
    BlockScanner,
    BlockStatus,
    CollectingSink,
    MonikerRangeBlock,
    ParagraphBlock,
    ScanConfig,
    scan,
    scan_config_context,
)
from monikers.moniker import TRAILING_END_MESSAGE, TRAILING_OPEN_MESSAGE
from monikers.scanner import iter_lines


class TestIterLines:
    def test_offsets_and_line_numbers(self) -> None:
        assert list(iter_lines("ab\ncd\n\nef")) == [
            (1, 0, "ab"),
            (2, 3, "cd"),
            (3, 6, ""),
            (4, 7, "ef"),
        ]

    def test_trailing_newline_adds_no_line(self) -> None:
        assert list(iter_lines("a\n")) == [(1, 0, "a")]

    def test_crlf(self) -> None:
        assert list(iter_lines("a\r\nb")) == [(1, 0, "a"), (2, 3, "b")]

    def test_empty(self) -> None:
        assert list(iter_lines("")) == []


class TestBasicScan:
    def test_open_and_close(self) -> None:
        source = ':::moniker range="a"\nbody\n:::moniker-end'
        doc = scan(source, sink=CollectingSink())

        assert len(doc.children) == 1
        block = doc.children[0]
        assert isinstance(block, MonikerRangeBlock)
        assert block.moniker_range == "a"
        assert block.lines == ["body"]
        assert block.content == "body"
        assert block.status is BlockStatus.CLOSED

    def test_span_round_trip(self) -> None:
        source = ':::moniker range="a"\nbody\n:::moniker-end\nafter'
        doc = scan(source, sink=CollectingSink())
        block = doc.monikers[0]

        assert block.span.start == 0
        assert block.span.end == source.index("\nafter")
        assert block.span.lineno == 1
        assert block.span.end_lineno == 3
        assert source[block.span.start : block.span.end].endswith(":::moniker-end")

    def test_span_start_is_line_start(self) -> None:
        source = 'intro\n\n  :::moniker range="a"\n  :::moniker-end'
        block = scan(source, sink=CollectingSink()).monikers[0]

        assert block.span.start == source.index("  :::moniker range")
        assert block.span.end == len(source)
        assert block.column == 2

    def test_blank_lines_do_not_close(self) -> None:
        source = ':::moniker range="a"\n\nfirst\n\n\nsecond\n\n:::moniker-end'
        block = scan(source, sink=CollectingSink()).monikers[0]

        assert block.status is BlockStatus.CLOSED
        assert block.lines == ["", "first", "", "", "second", ""]

    def test_surrounding_paragraphs(self) -> None:
        source = 'before one\nbefore two\n:::moniker range="v1"\ninside\n:::moniker-end\n\nafter'
        doc = scan(source, sink=CollectingSink())

        kinds = [type(b) for b in doc.children]
        assert kinds == [ParagraphBlock, MonikerRangeBlock, ParagraphBlock]
        assert doc.children[0].lines == ["before one", "before two"]
        assert doc.children[0].status is BlockStatus.CLOSED
        assert doc.children[2].lines == ["after"]

    def test_paragraph_span(self) -> None:
        source = "one\ntwo\n\nthree"
        doc = scan(source, sink=CollectingSink())

        first, second = doc.children
        assert (first.span.start, first.span.end) == (0, 7)
        assert (first.span.lineno, first.span.end_lineno) == (1, 2)
        assert (second.span.start, second.span.end) == (9, 14)

    def test_consecutive_blocks(self) -> None:
        source = (
            ':::moniker range="a"\nA\n:::moniker-end\n'
            '::::moniker range="b"\nB\n::::moniker-end\n'
        )
        doc = scan(source, sink=CollectingSink())

        assert [b.moniker_range for b in doc.monikers] == ["a", "b"]
        assert [b.colon_count for b in doc.monikers] == [3, 4]
        assert all(b.status is BlockStatus.CLOSED for b in doc.monikers)

    def test_source_file_recorded(self) -> None:
        doc = BlockScanner(sink=CollectingSink(), source_file="docs/a.md").scan("x")
        assert doc.source_file == "docs/a.md"

    def test_non_string_source(self) -> None:
        with pytest.raises(TypeError):
            scan(b":::moniker range=\"a\"")  # type: ignore[arg-type]


class TestColonMatching:
    def test_fewer_colons_do_not_close(self) -> None:
        source = '::::moniker range="a"\n:::moniker-end\ntext\n::::moniker-end'
        block = scan(source, sink=CollectingSink()).monikers[0]

        assert block.status is BlockStatus.CLOSED
        assert block.lines == [":::moniker-end", "text"]
        assert block.span.end_lineno == 4

    def test_longer_colon_run_closes(self) -> None:
        """Known quirk: the closing fence is a prefix compare, so extra colons still close."""
        source = ':::moniker range="a"\nbody\n::::moniker-end\nafter'
        doc = scan(source, sink=CollectingSink())

        block = doc.monikers[0]
        assert block.status is BlockStatus.CLOSED
        assert block.span.end_lineno == 3
        assert doc.children[-1].lines == ["after"]

    def test_nested_open_is_content(self) -> None:
        source = ':::moniker range="a"\n:::moniker range="b"\n:::moniker-end\n:::moniker-end'
        doc = scan(source, sink=CollectingSink())

        assert len(doc.monikers) == 1
        assert doc.monikers[0].lines == [':::moniker range="b"']
        assert doc.children[-1].lines == [":::moniker-end"]


class TestRejectedOpeners:
    def test_unterminated_quote_is_paragraph(self) -> None:
        sink = CollectingSink()
        doc = scan(':::moniker range="abc\ntext', sink=sink)

        assert doc.monikers == ()
        assert isinstance(doc.children[0], ParagraphBlock)
        assert doc.children[0].lines == [':::moniker range="abc', "text"]
        assert len(sink) == 0

    def test_two_colons_is_paragraph(self) -> None:
        doc = scan('::moniker range="a"\n::moniker-end', sink=CollectingSink())
        assert doc.monikers == ()

    def test_escaped_opener(self) -> None:
        doc = scan('\\:::moniker range="a"\n:::moniker-end', sink=CollectingSink())

        assert doc.monikers == ()
        assert doc.children[0].lines == ['\\:::moniker range="a"', ":::moniker-end"]

    def test_double_backslash_is_not_dispatched(self) -> None:
        """A literal backslash is the first character, so ':' never triggers."""
        source = '\\\\:::moniker range="a"\nbody\n:::moniker-end'
        doc = scan(source, sink=CollectingSink())

        assert doc.monikers == ()
        assert len(doc.children) == 1
        paragraph = doc.children[0]
        assert isinstance(paragraph, ParagraphBlock)
        assert paragraph.lines == ['\\\\:::moniker range="a"', "body", ":::moniker-end"]
        assert paragraph.span.start == 0
        assert paragraph.span.end == len(source)

    @pytest.mark.parametrize("backslashes", [1, 2, 3, 4])
    def test_backslash_runs_never_open(self, backslashes: int) -> None:
        line = "\\" * backslashes + ':::moniker range="a"'
        doc = scan(f"{line}\n:::moniker-end", sink=CollectingSink())

        assert doc.monikers == ()
        assert doc.children[0].lines[0] == line

    def test_escape_honored_only_when_configured(self) -> None:
        with scan_config_context(ScanConfig(honor_escapes=False)):
            doc = scan('\\:::moniker range="a"\n:::moniker-end', sink=CollectingSink())
        assert doc.monikers[0].moniker_range == "a"

    def test_code_indented_opener(self) -> None:
        doc = scan('    :::moniker range="a"\n:::moniker-end', sink=CollectingSink())
        assert doc.monikers == ()

    def test_code_indent_width_configurable(self) -> None:
        with scan_config_context(ScanConfig(code_indent_width=8)):
            doc = scan('    :::moniker range="a"\n:::moniker-end', sink=CollectingSink())
        assert doc.monikers[0].column == 4

    def test_case_insensitive_keywords_configurable(self) -> None:
        source = ':::MONIKER RANGE="a"\n:::Moniker-End'
        assert scan(source, sink=CollectingSink()).monikers == ()

        with scan_config_context(ScanConfig(case_sensitive_keywords=False)):
            block = scan(source, sink=CollectingSink()).monikers[0]
        assert block.status is BlockStatus.CLOSED


class TestDiagnostics:
    def test_trailing_open_and_end(self) -> None:
        sink = CollectingSink()
        doc = scan(':::moniker range="v1" extra\nbody\n:::moniker-end trailing', sink=sink)

        block = doc.monikers[0]
        assert block.moniker_range == "v1"
        assert block.status is BlockStatus.CLOSED
        assert sink.messages == [TRAILING_OPEN_MESSAGE, TRAILING_END_MESSAGE]
        assert [d.lineno for d in sink.diagnostics] == [1, 3]

    def test_source_file_in_diagnostics(self) -> None:
        sink = CollectingSink()
        BlockScanner(sink=sink, source_file="guide.md").scan(':::moniker range="v1" x')

        assert sink.diagnostics[0].source_file == "guide.md"
        assert str(sink.diagnostics[0]).startswith("guide.md:1:")

    def test_unterminated_block(self) -> None:
        sink = CollectingSink()
        source = ':::moniker range="a"\nline one\nline two'
        block = scan(source, sink=sink).monikers[0]

        assert block.status is BlockStatus.UNTERMINATED
        assert block.lines == ["line one", "line two"]
        assert block.span.end == len(':::moniker range="a"')
        assert block.span.end_lineno == 1
        assert sink.messages == ["unterminated block opened on line 1"]

    def test_unterminated_warning_can_be_disabled(self) -> None:
        sink = CollectingSink()
        with scan_config_context(ScanConfig(warn_unterminated=False)):
            block = scan(':::moniker range="a"', sink=sink).monikers[0]

        assert block.status is BlockStatus.UNTERMINATED
        assert len(sink) == 0

    def test_mismatch_is_silent(self) -> None:
        sink = CollectingSink()
        scan(':::moniker range="a"\n:::moniker-stop\n::moniker-end\n:::moniker-end', sink=sink)
        assert len(sink) == 0
