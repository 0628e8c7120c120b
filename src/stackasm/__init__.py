"""
stackasm - Front End for a Stack Machine Assembler
==================================================

This package turns source programs written in a small stack-machine
mnemonic language into an intermediate representation (IR) of per-line
statements, reporting every lexical and semantic error it finds in a
single pass.

Main Components
---------------
- **lexer**: ``Scanner`` - characters to tokens
- **parser**: ``LineAssembler`` - tokens to line statements
- **validator**: addressing-mode checks against the keyword table
- **keywords**: ``KeywordTable`` - the instruction set
- **errors**: diagnostics, ``ErrorReporter`` and exceptions
- **frontend**: ``FrontEnd`` - the whole pipeline

Quick Start
-----------
    >>> from stackasm import parse_source
    >>> result = parse_source("ldc.i3 5\\nhalt\\n")
    >>> [s.instruction.mnemonic.name for s in result.ir]
    ['ldc.i3', 'halt']

Or use the command-line tool:
    $ stkasm program.asm --listing
"""

__version__ = "0.1.0"

from stackasm.config import EofPolicy, FrontEndConfig
from stackasm.errors import (
    StackAsmError,
    SourceReadError,
    ConfigError,
    Position,
    ErrorKind,
    ErrorMessage,
    ErrorReporter,
)
from stackasm.frontend import FrontEnd, FrontEndResult, parse_file, parse_source
from stackasm.ir import Comment, Instruction, IntermediateRepresentation, LineStatement, Operand
from stackasm.keywords import INSTRUCTION_SET, AddressingMode, KeywordTable, Mnemonic
from stackasm.lexer import Scanner, Token, TokenKind
from stackasm.parser import LineAssembler
from stackasm.validator import Validator, validate_statement

__all__ = [
    "__version__",
    # Front end
    "FrontEnd",
    "FrontEndResult",
    "parse_source",
    "parse_file",
    # Configuration
    "FrontEndConfig",
    "EofPolicy",
    # Lexer
    "Scanner",
    "Token",
    "TokenKind",
    # Parser
    "LineAssembler",
    # Validation
    "Validator",
    "validate_statement",
    # Instruction set
    "AddressingMode",
    "Mnemonic",
    "KeywordTable",
    "INSTRUCTION_SET",
    # IR
    "IntermediateRepresentation",
    "LineStatement",
    "Instruction",
    "Operand",
    "Comment",
    # Errors
    "StackAsmError",
    "SourceReadError",
    "ConfigError",
    "Position",
    "ErrorKind",
    "ErrorMessage",
    "ErrorReporter",
]
