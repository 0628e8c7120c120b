"""
Stack Machine Assembly Lexer
============================

This module implements the scanner for the stack machine mnemonic
language. It pulls characters one at a time from a text stream and
classifies them into a lazy, forward-only stream of tokens.

Token Types
-----------
- MNEMONIC: A run starting with a letter (``halt``, ``ldc.i3``)
- OPERAND: A run starting with a digit or minus sign (``5``, ``-17``)
- COMMENT: From the comment marker to end of line (``; note``)
- EOL: Line terminator
- EOF: End of input
- UNKNOWN: Any other single character

Runs end at a boundary: whitespace, a line terminator, or end of input.
Mnemonic and operand text is not validated here; the parser decides
whether ``ldc.i3`` is an instruction or ``12ab`` a number.

Example
-------
>>> import io
>>> from stackasm.lexer import Scanner
>>> scanner = Scanner(io.StringIO("ldc.i3 -2 ; push\\n"), "example.asm")
>>> for token in scanner.tokens():
...     print(token)
Token(MNEMONIC, 'ldc.i3', 1:1)
Token(OPERAND, '-2', 1:8)
Token(COMMENT, '; push', 1:11)
Token(EOL, 1:17)
Token(EOF, 2:1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO
import logging
import string

from stackasm.errors import Position

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenKind(Enum):
    """Token categories of the stack machine language."""

    MNEMONIC = auto()   # Instruction name
    OPERAND = auto()    # Signed integer literal (raw text)
    COMMENT = auto()    # Comment text, marker included
    EOL = auto()        # End of line
    EOF = auto()        # End of file
    UNKNOWN = auto()    # Unrecognized character


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from the source.

    Attributes:
        kind: The TokenKind classification
        text: Raw token text (None for EOL and EOF)
        position: Position of the token's first character
    """
    kind: TokenKind
    text: Optional[str]
    position: Position

    def __repr__(self) -> str:
        where = f"{self.position.line}:{self.position.column}"
        if self.text is not None:
            return f"Token({self.kind.name}, {self.text!r}, {where})"
        return f"Token({self.kind.name}, {where})"

    __str__ = __repr__


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes stack machine assembly source.

    The scanner owns its character stream for the whole run and reads it
    strictly forward. It holds at most one character of lookahead, which
    is how a line terminator that ends a mnemonic or operand is left in
    place to become the following EOL token.

    Usage:
        with open(path, encoding="utf-8", newline="") as stream:
            scanner = Scanner(stream, path)
            for token in scanner.tokens():
                ...

    Attributes:
        filename: Name of the source (for positions)
        comment_marker: Character that starts a comment
    """

    LETTERS = string.ascii_letters
    DIGITS = string.digits
    MINUS = "-"
    NEWLINE = "\n"

    # Whitespace other than the line terminator
    IGNORED = " \t\r\f\v"

    def __init__(self, stream: TextIO, filename: str = "<input>", comment_marker: str = ";"):
        """
        Initialize the scanner.

        Args:
            stream: Text stream to read; open it with newline="" so that
                carriage returns reach the scanner unchanged
            filename: Name of the source file (for positions)
            comment_marker: Character that starts a comment
        """
        self._stream = stream
        self.filename = filename
        self.comment_marker = comment_marker

        # Position of the next character to be consumed
        self._line = 1
        self._column = 1

        # One character of lookahead; None means "not read yet"
        self._lookahead: Optional[str] = None

        self._exhausted = False

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Once EOF has been returned, every further call returns EOF again.
        """
        self._skip_ignored()

        position = self._position()
        char = self._peek()

        if char == "":
            if not self._exhausted:
                logger.debug(f"{self.filename}: end of input at {position.line}:{position.column}")
            self._exhausted = True
            return Token(TokenKind.EOF, None, position)

        if char in self.LETTERS:
            return Token(TokenKind.MNEMONIC, self._read_run(), position)

        if char in self.DIGITS or char == self.MINUS:
            return Token(TokenKind.OPERAND, self._read_run(), position)

        if char == self.comment_marker:
            return Token(TokenKind.COMMENT, self._read_comment(), position)

        if char == self.NEWLINE:
            self._advance()
            return Token(TokenKind.EOL, None, position)

        self._advance()
        return Token(TokenKind.UNKNOWN, char, position)

    def tokens(self) -> Iterator[Token]:
        """
        Generate tokens up to and including EOF.

        The stream is single-pass: a second call continues where the
        first one stopped, which after EOF means a lone EOF token.
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _position(self) -> Position:
        return Position(self._line, self._column, self.filename)

    def _peek(self) -> str:
        """
        Look at the next character without consuming it.

        Returns an empty string at end of input.
        """
        if self._lookahead is None:
            self._lookahead = self._stream.read(1)
        return self._lookahead

    def _advance(self) -> str:
        """
        Consume and return the next character, updating line and column.
        """
        char = self._peek()
        if char == "":
            return ""

        self._lookahead = None

        if char == self.NEWLINE:
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _at_boundary(self) -> bool:
        # End of input (empty string) counts as a boundary too
        char = self._peek()
        return char == "" or char in self.IGNORED or char == self.NEWLINE

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _skip_ignored(self) -> None:
        """Skip whitespace other than the line terminator."""
        while self._peek() and self._peek() in self.IGNORED:
            self._advance()

    def _read_run(self) -> str:
        """Accumulate characters up to, not including, the next boundary."""
        chars = []
        while not self._at_boundary():
            chars.append(self._advance())
        return "".join(chars)

    def _read_comment(self) -> str:
        """
        Accumulate a comment up to end of line.

        The line terminator is left for the EOL token, and a carriage
        return just before it is dropped from the text.
        """
        chars = []
        while self._peek() and self._peek() != self.NEWLINE:
            chars.append(self._advance())
        if chars and chars[-1] == "\r":
            chars.pop()
        return "".join(chars)
