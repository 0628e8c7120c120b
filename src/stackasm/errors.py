"""
stackasm Error Handling
=======================

This module defines everything the front end uses to describe problems in
a source program, plus the small exception hierarchy for conditions that
stop a run outright.

Two kinds of problems exist:

1. **Diagnostics** (``ErrorMessage``): lexical and semantic errors found
   while scanning and parsing. These never interrupt processing. They are
   appended to an ``ErrorReporter`` and inspected by the caller once the
   whole source has been read, so a malformed program still yields a
   best-effort IR together with every problem found in one pass.

2. **Fatal errors** (``StackAsmError`` subclasses): the input cannot be
   opened or decoded, or the configuration is invalid. These are raised.

Exception Hierarchy
-------------------
StackAsmError (base)
├── SourceReadError - input file cannot be opened or decoded
└── ConfigError - invalid configuration value

Message Format
--------------
Diagnostics render as:
    filename:line:column: error: description
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception Class
# =============================================================================

class StackAsmError(Exception):
    """
    Base exception for all fatal stackasm errors.

    Diagnostics about the source program are never raised; they are
    collected by ``ErrorReporter``. Only conditions that make it
    impossible to process the input at all derive from this class.
    """
    pass


class SourceReadError(StackAsmError):
    """
    The source file could not be opened or decoded.

    Raised before any token is produced.

    Attributes:
        path: The path that was requested
        reason: Human-readable cause (usually from the underlying OSError)
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read source '{path}': {reason}")


class ConfigError(StackAsmError):
    """Invalid configuration value (from code or from the environment)."""
    pass


# =============================================================================
# Source Position Tracking
# =============================================================================

@dataclass(frozen=True)
class Position:
    """
    A location in source code.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        filename: Name of the source file (or "<input>" for string input)
    """
    line: int
    column: int
    filename: str = "<input>"

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Diagnostics
# =============================================================================

class ErrorKind(Enum):
    """
    Categories of diagnostics, each with its fixed message text.

    The value of each member is the message recorded for it.
    """

    # Lexical
    UNKNOWN_TOKEN = "Unknown token"

    # Semantic (addressing-mode rules)
    INVALID_MNEMONIC = "Invalid mnemonic or directive."
    OPERAND_REQUIRED = "Instruction requires an operand."
    OPERAND_NOT_ALLOWED = "Inherent instruction must not have an operand."

    # Structural (malformed line)
    OPERAND_WITHOUT_INSTRUCTION = "Operand without instruction."
    INVALID_OPERAND = "Invalid operand."
    EXTRA_OPERAND = "Instruction already has an operand."
    EXTRA_MNEMONIC = "Multiple instructions on one line."
    MISSING_EOL = "Missing line terminator."


@dataclass(frozen=True)
class ErrorMessage:
    """
    A single diagnostic about the source program.

    Attributes:
        text: The message text
        position: Where in the source the problem was found
        kind: Diagnostic category (None for free-form messages)
    """
    text: str
    position: Position
    kind: Optional[ErrorKind] = None

    @classmethod
    def of(cls, kind: ErrorKind, position: Position) -> "ErrorMessage":
        """Build the message for a diagnostic category."""
        return cls(text=kind.value, position=position, kind=kind)

    def __str__(self) -> str:
        return f"{self.position}: error: {self.text}"


# =============================================================================
# Error Reporter
# =============================================================================

class ErrorReporter:
    """
    Collects diagnostics for batch reporting.

    The line assembler records into this collection and carries on, so
    every problem in a source file is reported from a single run. The
    collection is ordered and append-only: nothing is ever removed during
    a run.

    Example:
        reporter = ErrorReporter()
        reporter.record(ErrorMessage.of(ErrorKind.UNKNOWN_TOKEN, position))

        if reporter.has_errors():
            print(reporter.report())
    """

    def __init__(self):
        self._messages: list[ErrorMessage] = []

    def record(self, message: ErrorMessage) -> None:
        """Append a diagnostic."""
        logger.debug(f"recorded {message}")
        self._messages.append(message)

    def all(self) -> tuple[ErrorMessage, ...]:
        """Return every recorded diagnostic, in recording order."""
        return tuple(self._messages)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been recorded."""
        return len(self._messages) > 0

    def error_count(self) -> int:
        """Return the number of recorded diagnostics."""
        return len(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ErrorMessage]:
        return iter(tuple(self._messages))

    def report(self) -> str:
        """
        Format all diagnostics for display.

        Returns:
            One line per diagnostic followed by a summary line
        """
        lines = [str(message) for message in self._messages]

        error_word = "error" if len(self._messages) == 1 else "errors"
        lines.append(f"{len(self._messages)} {error_word}")

        return "\n".join(lines)
