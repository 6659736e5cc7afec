"""
monikers — moniker range block scanner

Recognizes version-scoped regions in Markdown-style documents:

    :::moniker range="netcore-3.0"
    Content only shown for netcore-3.0
    :::moniker-end

Quick Start:
    >>> from monikers import scan
    >>> doc = scan(':::moniker range="netcore-3.0"\\nHello\\n:::moniker-end')
    >>> block = doc.monikers[0]
    >>> block.moniker_range, block.colon_count, block.lines
    ('netcore-3.0', 3, ['Hello'])

Collecting diagnostics:
    >>> from monikers import CollectingSink, scan
    >>> sink = CollectingSink()
    >>> doc = scan(':::moniker range="v1" extra\\n:::moniker-end', sink=sink)
    >>> sink.messages
    ['invalid trailing characters on opening line']

Installation:
    pip install monikers             # zero runtime dependencies
"""

from monikers.blocks import (
    Block,
    BlockState,
    BlockStatus,
    Document,
    MonikerRangeBlock,
    ParagraphBlock,
)
from monikers.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from monikers.diagnostics import CollectingSink, Diagnostic, LoggerSink
from monikers.errors import BlockStateError, MonikersError, RegistryError, ScanError
from monikers.location import SourceSpan
from monikers.moniker import MonikerRangeParser, skip_spaces_or_tabs
from monikers.processor import LineProcessor
from monikers.protocols import BlockParser, DiagnosticSink
from monikers.registry import (
    BlockParserRegistry,
    BlockParserRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)
from monikers.scanner import BlockScanner, scan
from monikers.slice import StringSlice

__version__ = "0.1.0"

__all__ = [
    # Scanning
    "scan",
    "BlockScanner",
    "LineProcessor",
    "StringSlice",
    # Recognizers
    "MonikerRangeParser",
    "skip_spaces_or_tabs",
    "BlockParser",
    "BlockParserRegistry",
    "BlockParserRegistryBuilder",
    "create_default_registry",
    "create_registry_with_defaults",
    # Blocks
    "Block",
    "BlockState",
    "BlockStatus",
    "Document",
    "MonikerRangeBlock",
    "ParagraphBlock",
    "SourceSpan",
    # Diagnostics
    "DiagnosticSink",
    "Diagnostic",
    "LoggerSink",
    "CollectingSink",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Errors
    "MonikersError",
    "ScanError",
    "BlockStateError",
    "RegistryError",
]
