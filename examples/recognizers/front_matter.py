"""Register a second recognizer next to the moniker one."""

from monikers import (
    Block,
    BlockScanner,
    BlockState,
    LineProcessor,
    SourceSpan,
    create_registry_with_defaults,
)


class FrontMatterParser:
    """Recognizes a +++ fenced block."""

    opening_characters = ("+",)

    def try_open(self, processor: LineProcessor) -> BlockState:
        if processor.is_code_indent or not processor.line.match_start("+++"):
            return BlockState.NONE
        processor.new_blocks.append(
            Block(span=SourceSpan(start=processor.start, end=processor.line_end, lineno=processor.lineno))
        )
        return BlockState.CONTINUE_DISCARD

    def try_continue(self, processor: LineProcessor, block: Block) -> BlockState:
        if processor.line.match_start("+++"):
            block.update_span_end(processor.line_end, processor.lineno)
            return BlockState.BREAK_DISCARD
        return BlockState.CONTINUE


registry = create_registry_with_defaults().register(FrontMatterParser(), priority=10).build()

source = """\
+++
title = "Guide"
+++
:::moniker range="v2"
Only in v2.
:::moniker-end
"""

doc = BlockScanner(registry=registry).scan(source)
for block in doc.children:
    print(type(block).__name__, block.span, block.lines)
