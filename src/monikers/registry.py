"""Block parser registry: trigger character to recognizers.

The scanner looks up the first significant character of each line and
offers the line to the recognizers registered for it, highest priority
first.

Thread Safety:
BlockParserRegistry is immutable after creation. Safe to share.
Use BlockParserRegistryBuilder for mutable construction.

Example:
    >>> builder = BlockParserRegistryBuilder()
    >>> builder.register(MonikerRangeParser())
    >>> registry = builder.build()
    >>> registry.get(":")
    (MonikerRangeParser(sink=LoggerSink),)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from monikers.errors import RegistryError

if TYPE_CHECKING:
    from monikers.protocols import BlockParser, DiagnosticSink


class BlockParserRegistry:
    """Immutable dispatch table of block recognizers.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_parsers", "_by_char")

    def __init__(
        self,
        parsers: tuple[BlockParser, ...],
        by_char: dict[str, tuple[BlockParser, ...]],
    ) -> None:
        """Initialize registry with pre-built mappings.

        Use BlockParserRegistryBuilder to create instances.
        """
        self._parsers = parsers
        self._by_char = by_char

    def get(self, char: str) -> tuple[BlockParser, ...]:
        """Get recognizers for a trigger character, in priority order.

        Returns:
            Empty tuple when nothing is registered for ``char``
        """
        return self._by_char.get(char, ())

    @property
    def trigger_characters(self) -> frozenset[str]:
        """All registered trigger characters."""
        return frozenset(self._by_char)

    @property
    def parsers(self) -> tuple[BlockParser, ...]:
        """All registered recognizers in registration order."""
        return self._parsers

    def __contains__(self, char: str) -> bool:
        return char in self._by_char

    def __len__(self) -> int:
        """Number of registered recognizers."""
        return len(self._parsers)


class BlockParserRegistryBuilder:
    """Mutable builder for BlockParserRegistry.

    Example:
        >>> builder = BlockParserRegistryBuilder()
        >>> builder.register(MonikerRangeParser(), priority=10)
        >>> registry = builder.build()
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[tuple[int, BlockParser]] = []

    def register(self, parser: BlockParser, *, priority: int = 0) -> BlockParserRegistryBuilder:
        """Register a block recognizer.

        Args:
            parser: Object implementing the BlockParser protocol
            priority: Higher priorities are tried first; ties keep
                registration order

        Returns:
            Self for chaining

        Raises:
            RegistryError: If the parser has no opening characters or one
                of them is not a single non-whitespace character
        """
        name = type(parser).__name__
        chars = getattr(parser, "opening_characters", None)
        if not chars:
            raise RegistryError(name, "missing 'opening_characters'")

        for char in chars:
            if not isinstance(char, str) or len(char) != 1:
                raise RegistryError(name, f"opening character {char!r} must be a single character")
            if char.isspace():
                raise RegistryError(name, f"opening character {char!r} cannot be whitespace")

        self._entries.append((priority, parser))
        return self

    def register_all(self, parsers: list[BlockParser]) -> BlockParserRegistryBuilder:
        """Register multiple recognizers at default priority."""
        for parser in parsers:
            self.register(parser)
        return self

    def build(self) -> BlockParserRegistry:
        """Build immutable registry from registered recognizers."""
        # sorted() is stable, so equal priorities keep registration order
        ordered = sorted(self._entries, key=lambda entry: -entry[0])
        by_char: dict[str, list[BlockParser]] = {}
        for _, parser in ordered:
            for char in parser.opening_characters:
                by_char.setdefault(char, []).append(parser)

        return BlockParserRegistry(
            parsers=tuple(parser for _, parser in self._entries),
            by_char={char: tuple(parsers) for char, parsers in by_char.items()},
        )

    def __len__(self) -> int:
        return len(self._entries)


def create_registry_with_defaults(sink: DiagnosticSink | None = None) -> BlockParserRegistryBuilder:
    """Create a builder pre-populated with the built-in recognizers.

    Args:
        sink: Diagnostic sink handed to the built-in recognizers

    Returns:
        BlockParserRegistryBuilder with MonikerRangeParser registered
    """
    from monikers.moniker import MonikerRangeParser

    builder = BlockParserRegistryBuilder()
    builder.register(MonikerRangeParser(sink))
    return builder


def create_default_registry(sink: DiagnosticSink | None = None) -> BlockParserRegistry:
    """Build the default registry (MonikerRangeParser only)."""
    return create_registry_with_defaults(sink).build()
