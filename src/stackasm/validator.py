"""
Line Statement Validation
=========================

Checks a finished line statement against the keyword table. Only lines
that carry an instruction are checked; blank and comment-only lines are
always valid.

Rules, first match wins (at most one error per line):

1. Mnemonic not in the keyword table
   -> "Invalid mnemonic or directive."
2. Known mnemonic, canonical mode is not inherent, no operand
   -> "Instruction requires an operand."
3. Known mnemonic, canonical mode is inherent, operand present
   -> "Inherent instruction must not have an operand."
"""

from typing import Optional

from stackasm.errors import ErrorKind, ErrorMessage
from stackasm.ir import LineStatement
from stackasm.keywords import AddressingMode, KeywordTable


def validate_statement(statement: LineStatement, keywords: KeywordTable) -> Optional[ErrorMessage]:
    """
    Check one line statement.

    Args:
        statement: A finalized line statement
        keywords: Table of known mnemonics

    Returns:
        The error for this line, or None if it is valid
    """
    instruction = statement.instruction
    if instruction is None:
        return None

    canonical = keywords.lookup(instruction.mnemonic.name)
    if canonical is None:
        kind = ErrorKind.INVALID_MNEMONIC
    elif canonical.mode is not AddressingMode.INHERENT and instruction.operand is None:
        kind = ErrorKind.OPERAND_REQUIRED
    elif canonical.mode is AddressingMode.INHERENT and instruction.operand is not None:
        kind = ErrorKind.OPERAND_NOT_ALLOWED
    else:
        return None

    return ErrorMessage.of(kind, instruction.position)


class Validator:
    """Validates line statements against a fixed keyword table."""

    def __init__(self, keywords: KeywordTable):
        self.keywords = keywords

    def check(self, statement: LineStatement) -> Optional[ErrorMessage]:
        return validate_statement(statement, self.keywords)
