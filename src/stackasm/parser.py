"""
Stack Machine Assembly Parser
=============================

This module implements the line assembler: it pulls tokens from the
scanner one at a time, builds the statement for each source line, and
appends the finished statement to the intermediate representation.

Line Grammar
------------
    LineStatement = [ Mnemonic [ Operand ] ] [ Comment ] EOL .

Addressing Mode Resolution
--------------------------
The addressing mode of an instruction is only known once the whole line
has been seen:

| Line content      | Mode      | Example       |
|-------------------|-----------|---------------|
| mnemonic          | Inherent  | ``halt``      |
| mnemonic operand  | Immediate | ``ldc.i3 5``  |

While a line is open it is held in a ``LineBuilder`` that moves through
EMPTY -> HAS_MNEMONIC -> HAS_OPERAND. At end of line the builder is
turned into an immutable ``LineStatement``, validated, and appended to
the IR.

Error Recovery
--------------
Every token kind is handled in every line state. Tokens that do not fit
the current state (an operand with no mnemonic before it, a second
operand, a second mnemonic) are held as errors on the line and otherwise
ignored. When the line is finalized, an unknown mnemonic takes priority:
the held errors are dropped and the line reports only "Invalid mnemonic
or directive.". Otherwise the held errors are recorded and the validator
is skipped, so a malformed line yields one diagnostic rather than a
cascade. Parsing always continues to the end of input.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional
import logging
import re

from stackasm.config import EofPolicy, FrontEndConfig
from stackasm.errors import ErrorKind, ErrorMessage, ErrorReporter
from stackasm.ir import Comment, Instruction, IntermediateRepresentation, LineStatement, Operand
from stackasm.keywords import AddressingMode, KeywordTable, Mnemonic
from stackasm.lexer import Scanner, Token, TokenKind
from stackasm.validator import Validator

logger = logging.getLogger(__name__)

# Signed decimal integer, ASCII digits only
INTEGER_PATTERN = re.compile(r"-?[0-9]+")


# =============================================================================
# Line State
# =============================================================================

class LineState(Enum):
    """Progress of the line currently being assembled."""
    EMPTY = auto()          # No instruction yet
    HAS_MNEMONIC = auto()   # Mnemonic seen, no operand
    HAS_OPERAND = auto()    # Mnemonic and operand seen


@dataclass
class LineBuilder:
    """
    Mutable holder for the line being assembled.

    Attributes:
        line_number: Source line this builder collects (1-indexed)
        state: How much of the instruction has been seen
        mnemonic: The mnemonic token, once seen
        operand: The parsed operand, once seen
        comment: The line's comment, if any
        has_content: True once any token other than EOL arrived
        structural_errors: Tokens the parser rejected on this line, held
            until the line is finalized
    """
    line_number: int
    state: LineState = LineState.EMPTY
    mnemonic: Optional[Token] = None
    operand: Optional[Operand] = None
    comment: Optional[Comment] = None
    has_content: bool = False
    structural_errors: list[ErrorMessage] = field(default_factory=list)

    @property
    def has_structural_error(self) -> bool:
        return bool(self.structural_errors)

    def build(self, keywords: KeywordTable) -> LineStatement:
        """
        Finalize the line into an immutable statement.

        A mnemonic without an operand becomes inherent, one with an
        operand becomes immediate. The opcode is filled in from the
        keyword table when the name is known.
        """
        instruction = None
        if self.mnemonic is not None:
            canonical = keywords.lookup(self.mnemonic.text)
            mode = AddressingMode.INHERENT if self.operand is None else AddressingMode.IMMEDIATE
            instruction = Instruction(
                mnemonic=Mnemonic(
                    name=self.mnemonic.text,
                    opcode=canonical.opcode if canonical is not None else None,
                    mode=mode,
                ),
                position=self.mnemonic.position,
                operand=self.operand,
            )
        return LineStatement(
            line_number=self.line_number,
            instruction=instruction,
            comment=self.comment,
        )


# =============================================================================
# Parser Implementation
# =============================================================================

class LineAssembler:
    """
    Parses a token stream into line statements.

    The keyword table, error reporter and configuration are passed in by
    the caller; the assembler owns only the line being built and the IR
    it produces.

    Usage:
        scanner = Scanner(stream, filename)
        reporter = ErrorReporter()
        assembler = LineAssembler(scanner, KeywordTable.default(), reporter)
        ir = assembler.parse()
    """

    def __init__(
        self,
        scanner: Scanner,
        keywords: KeywordTable,
        reporter: ErrorReporter,
        config: Optional[FrontEndConfig] = None,
    ):
        """
        Initialize the parser.

        Args:
            scanner: Token source, consumed exactly once
            keywords: Table of known mnemonics
            reporter: Receives every diagnostic
            config: Front-end options (defaults if None)
        """
        self._scanner = scanner
        self._keywords = keywords
        self._reporter = reporter
        self._config = config if config is not None else FrontEndConfig()
        self._validator = Validator(keywords)

        self._ir = IntermediateRepresentation()
        self._line = LineBuilder(line_number=1)
        self._lookahead: Optional[Token] = None
        self._done = False

        self._handlers: dict[TokenKind, Callable[[Token], None]] = {
            TokenKind.COMMENT: self._on_comment,
            TokenKind.MNEMONIC: self._on_mnemonic,
            TokenKind.OPERAND: self._on_operand,
            TokenKind.UNKNOWN: self._on_unknown,
            TokenKind.EOL: self._on_eol,
        }

    @property
    def ir(self) -> IntermediateRepresentation:
        return self._ir

    def parse(self) -> IntermediateRepresentation:
        """
        Parse every token up to EOF.

        Calling this again after it has returned does nothing and returns
        the same IR.

        Returns:
            The intermediate representation, one statement per line
        """
        if self._done:
            return self._ir

        self._lookahead = self._scanner.next_token()
        while self._lookahead.kind != TokenKind.EOF:
            self._handlers[self._lookahead.kind](self._lookahead)
            self._lookahead = self._scanner.next_token()

        self._on_eof(self._lookahead)
        self._done = True

        logger.debug(
            f"{self._scanner.filename}: {len(self._ir)} statements, "
            f"{self._reporter.error_count()} errors so far"
        )
        return self._ir

    # =========================================================================
    # Token Handlers
    # =========================================================================

    def _on_comment(self, token: Token) -> None:
        self._line.has_content = True
        self._line.comment = Comment(text=token.text, position=token.position)

    def _on_mnemonic(self, token: Token) -> None:
        self._line.has_content = True
        if self._line.state is not LineState.EMPTY:
            self._structural_error(ErrorKind.EXTRA_MNEMONIC, token)
            return
        self._line.mnemonic = token
        self._line.state = LineState.HAS_MNEMONIC

    def _on_operand(self, token: Token) -> None:
        self._line.has_content = True

        if self._line.state is LineState.EMPTY:
            self._structural_error(ErrorKind.OPERAND_WITHOUT_INSTRUCTION, token)
            return
        if self._line.state is LineState.HAS_OPERAND:
            self._structural_error(ErrorKind.EXTRA_OPERAND, token)
            return

        if not INTEGER_PATTERN.fullmatch(token.text):
            self._structural_error(ErrorKind.INVALID_OPERAND, token)
            return

        self._line.operand = Operand(
            raw_text=token.text,
            value=int(token.text),
            position=token.position,
        )
        self._line.state = LineState.HAS_OPERAND

    def _on_unknown(self, token: Token) -> None:
        # Lexical error; the line itself is left as it was
        self._line.has_content = True
        self._reporter.record(ErrorMessage.of(ErrorKind.UNKNOWN_TOKEN, token.position))

    def _on_eol(self, token: Token) -> None:
        self._finalize_line()
        self._line = LineBuilder(line_number=token.position.line + 1)

    def _on_eof(self, token: Token) -> None:
        if not self._line.has_content:
            return

        if self._config.eof_policy is EofPolicy.IMPLICIT_EOL:
            self._finalize_line()
        else:
            self._record_structural_errors()
            self._reporter.record(ErrorMessage.of(ErrorKind.MISSING_EOL, token.position))
            logger.debug(f"dropped unterminated line {self._line.line_number}")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _structural_error(self, kind: ErrorKind, token: Token) -> None:
        self._line.structural_errors.append(ErrorMessage.of(kind, token.position))

    def _record_structural_errors(self) -> None:
        for error in self._line.structural_errors:
            self._reporter.record(error)

    def _has_unknown_mnemonic(self) -> bool:
        mnemonic = self._line.mnemonic
        return mnemonic is not None and mnemonic.text not in self._keywords

    def _finalize_line(self) -> None:
        statement = self._line.build(self._keywords)

        if self._line.has_structural_error and not self._has_unknown_mnemonic():
            self._record_structural_errors()
        else:
            if self._line.has_structural_error:
                logger.debug(
                    f"line {statement.line_number}: unknown mnemonic, "
                    f"dropping {len(self._line.structural_errors)} structural errors"
                )
            error = self._validator.check(statement)
            if error is not None:
                self._reporter.record(error)

        self._ir.append(statement)
        logger.debug(f"line {statement.line_number}: {statement}")
