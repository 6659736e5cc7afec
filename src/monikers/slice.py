"""Cursor over the characters of a single source line.

StringSlice is the unit every recognizer works on: a window into one
line of text with a movable start index. Reading past the end yields the
``END`` sentinel instead of raising, so grammar loops can be written as
``while c == ":": c = slice.next_char()``.

Thread Safety:
StringSlice instances are created per line by the scanner and never
shared.

"""

from __future__ import annotations

# Returned by current_char/next_char once the cursor is past the end
END = "\0"

SPACE_OR_TAB: frozenset[str] = frozenset(" \t")


class StringSlice:
    """Mutable cursor over ``text[start:end]``.

    Attributes:
        text: The full line text (without its line terminator)
        start: Cursor index into ``text``
        end: Exclusive end index into ``text``
        position: Absolute source offset of ``text[0]``

    Usage:
            >>> s = StringSlice(":::moniker-end", position=10)
            >>> s.match_start(":::")
            True
            >>> s.current_char
            'm'
            >>> s.absolute_position
            13

    """

    __slots__ = ("text", "start", "end", "position")

    def __init__(self, text: str, start: int = 0, end: int | None = None, position: int = 0) -> None:
        self.text = text
        self.start = start
        self.end = len(text) if end is None else end
        self.position = position

    @property
    def current_char(self) -> str:
        """Character at the cursor, or END."""
        if self.start < self.end:
            return self.text[self.start]
        return END

    def next_char(self) -> str:
        """Advance the cursor by one and return the new current character."""
        if self.start < self.end:
            self.start += 1
        return self.current_char

    def peek_char(self, offset: int = 1) -> str:
        """Return the character ``offset`` positions after the cursor without moving."""
        index = self.start + offset
        if 0 <= index < self.end:
            return self.text[index]
        return END

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    @property
    def absolute_position(self) -> int:
        """Absolute source offset of the cursor."""
        return self.position + self.start

    @property
    def absolute_end(self) -> int:
        """Absolute exclusive source offset of the end of the slice."""
        return self.position + self.end

    def match_start(self, literal: str, case_sensitive: bool = True) -> bool:
        """Advance past ``literal`` if the slice starts with it.

        The comparison covers exactly ``len(literal)`` characters; whatever
        follows the literal is not inspected.

        Args:
            literal: Text expected at the cursor
            case_sensitive: Compare case-sensitively (default)

        Returns:
            True and the cursor moved past the literal, or False and the
            cursor unchanged.
        """
        stop = self.start + len(literal)
        if stop > self.end:
            return False
        candidate = self.text[self.start : stop]
        if case_sensitive:
            matched = candidate == literal
        else:
            matched = candidate.casefold() == literal.casefold()
        if matched:
            self.start = stop
        return matched

    def is_escaped(self) -> bool:
        """Check whether the character at the cursor is backslash-escaped.

        A character is escaped when it is preceded by an odd number of
        consecutive backslashes (``\\\\:`` is a literal backslash followed
        by an unescaped colon).
        """
        count = 0
        index = self.start - 1
        while index >= 0 and self.text[index] == "\\":
            count += 1
            index -= 1
        return count % 2 == 1

    def __str__(self) -> str:
        return self.text[self.start : self.end]

    def __repr__(self) -> str:
        return f"StringSlice({str(self)!r}, position={self.absolute_position})"
