"""
Stack Machine Assembler Front End - Main Interface
==================================================

This module provides the ``FrontEnd`` class, the primary interface for
turning stack machine assembly source into its intermediate
representation. It wires the scanner to the line assembler, hands both
an explicitly constructed keyword table and error reporter, and exposes
the results.

Example Usage
-------------
>>> from stackasm import FrontEnd
>>> front = FrontEnd()
>>> ir = front.parse_string('''ldc.i3 5   ; push five
... halt
... ''')
>>> len(ir)
2
>>> front.has_errors()
False

Or with the convenience function:

>>> from stackasm import parse_source
>>> result = parse_source("foo\\n")
>>> [str(e) for e in result.errors]
['<input>:1:1: error: Invalid mnemonic or directive.']
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import io
import logging

from stackasm.config import FrontEndConfig
from stackasm.errors import ConfigError, ErrorMessage, ErrorReporter, SourceReadError
from stackasm.ir import IntermediateRepresentation
from stackasm.keywords import KeywordTable
from stackasm.lexer import Scanner
from stackasm.parser import LineAssembler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrontEndResult:
    """
    Outcome of one front-end run.

    Attributes:
        ir: The line statements, in source order
        errors: Every diagnostic, in the order it was recorded
    """
    ir: IntermediateRepresentation
    errors: tuple[ErrorMessage, ...]

    @property
    def ok(self) -> bool:
        return not self.errors


class FrontEnd:
    """
    Stack machine assembler front end.

    Each call to ``parse_string`` or ``parse_file`` is an independent run
    with a fresh error reporter; the accessors report on the latest run.

    Attributes:
        config: Front-end options
        keywords: Table of known mnemonics
    """

    def __init__(
        self,
        config: Optional[FrontEndConfig] = None,
        keywords: Optional[KeywordTable] = None,
    ):
        """
        Initialize the front end.

        Args:
            config: Front-end options (defaults if None)
            keywords: Keyword table; by default the full instruction set,
                honouring config.case_sensitive

        Raises:
            ConfigError: If keywords is given and its case sensitivity
                differs from config.case_sensitive
        """
        self.config = config if config is not None else FrontEndConfig()
        if keywords is None:
            keywords = KeywordTable.default(case_sensitive=self.config.case_sensitive)
        elif keywords.case_sensitive != self.config.case_sensitive:
            raise ConfigError(
                f"keyword table is case-{'sensitive' if keywords.case_sensitive else 'insensitive'} "
                f"but config.case_sensitive is {self.config.case_sensitive}"
            )
        self.keywords = keywords
        self._reporter = ErrorReporter()
        self._ir = IntermediateRepresentation()

    # =========================================================================
    # Parsing
    # =========================================================================

    def parse_string(self, source: str, filename: str = "<input>") -> IntermediateRepresentation:
        """
        Parse source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for positions

        Returns:
            The intermediate representation
        """
        return self._run(io.StringIO(source, newline=""), filename)

    def parse_file(self, filepath: str | Path) -> IntermediateRepresentation:
        """
        Parse source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            The intermediate representation

        Raises:
            SourceReadError: If the file cannot be opened or decoded
        """
        path = Path(filepath)
        logger.info(f"Parsing {path}")

        try:
            stream = open(path, "r", encoding=self.config.encoding, newline="")
        except OSError as e:
            raise SourceReadError(str(path), e.strerror or str(e)) from e

        with stream:
            try:
                return self._run(stream, str(path))
            except UnicodeDecodeError as e:
                raise SourceReadError(
                    str(path), f"not valid {self.config.encoding} text ({e.reason})"
                ) from e

    def _run(self, stream, filename: str) -> IntermediateRepresentation:
        self._reporter = ErrorReporter()
        scanner = Scanner(stream, filename, comment_marker=self.config.comment_marker)
        assembler = LineAssembler(scanner, self.keywords, self._reporter, self.config)
        self._ir = assembler.parse()

        logger.info(
            f"{filename}: {len(self._ir)} statements, {self._reporter.error_count()} errors"
        )
        return self._ir

    # =========================================================================
    # Results
    # =========================================================================

    def get_ir(self) -> IntermediateRepresentation:
        return self._ir

    def get_errors(self) -> tuple[ErrorMessage, ...]:
        return self._reporter.all()

    def get_result(self) -> FrontEndResult:
        return FrontEndResult(ir=self._ir, errors=self._reporter.all())

    def has_errors(self) -> bool:
        """
        Check if the latest run produced errors.

        Returns:
            True if errors occurred
        """
        return self._reporter.has_errors()

    def get_error_report(self) -> str:
        """
        Get formatted error report.

        Returns:
            Error report string
        """
        return self._reporter.report()


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    config: Optional[FrontEndConfig] = None,
) -> FrontEndResult:
    """
    Convenience function to parse source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for positions
        config: Front-end options

    Returns:
        The IR and the error list
    """
    front = FrontEnd(config)
    front.parse_string(source, filename)
    return front.get_result()


def parse_file(filepath: str | Path, config: Optional[FrontEndConfig] = None) -> FrontEndResult:
    """
    Convenience function to parse a file.

    Args:
        filepath: Path to source file
        config: Front-end options

    Returns:
        The IR and the error list

    Raises:
        SourceReadError: If the file cannot be opened or decoded
    """
    front = FrontEnd(config)
    front.parse_file(filepath)
    return front.get_result()
