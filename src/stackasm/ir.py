"""
Intermediate Representation
===========================

The parsed form of a source program: one ``LineStatement`` per source
line, in order. Every value here is immutable once built; the
``IntermediateRepresentation`` container itself only ever grows.

Each LineStatement is composed of three optional parts followed by an
end of line:

    LineStatement = [ Label ] [ Instruction ] [ Comment ] EOL .

Labels are reserved for a later stage and are always None for now.

The IR is what a code generator consumes. ``format_listing()`` renders
it as a human-readable listing for debugging.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from stackasm.errors import Position
from stackasm.keywords import AddressingMode, Mnemonic


@dataclass(frozen=True)
class Operand:
    """
    A literal integer operand.

    Attributes:
        raw_text: Text as written in the source (e.g. "-17")
        value: Parsed signed value
        position: Position of the first character
    """
    raw_text: str
    value: int
    position: Position


@dataclass(frozen=True)
class Comment:
    """A comment; text starts at the marker and excludes the line terminator."""
    text: str
    position: Position


@dataclass(frozen=True)
class Instruction:
    """
    A machine instruction as it appears on one line.

    Attributes:
        mnemonic: Line-local mnemonic with its resolved addressing mode
        position: Position of the mnemonic
        operand: The operand, or None for an instruction written without one
    """
    mnemonic: Mnemonic
    position: Position
    operand: Optional[Operand] = None

    @property
    def mode(self) -> AddressingMode:
        return self.mnemonic.mode


@dataclass(frozen=True)
class LineStatement:
    """
    The parsed content of one source line.

    Attributes:
        line_number: Source line (1-indexed)
        label: Reserved; always None
        instruction: The instruction, if the line has one
        comment: The comment, if the line has one
    """
    line_number: int
    label: Optional[str] = None
    instruction: Optional[Instruction] = None
    comment: Optional[Comment] = None

    @property
    def is_empty(self) -> bool:
        """True for a blank line."""
        return self.label is None and self.instruction is None and self.comment is None


class IntermediateRepresentation:
    """
    Ordered, append-only sequence of line statements.

    Supports len(), iteration and indexing; there is no way to remove or
    replace an entry.
    """

    def __init__(self):
        self._statements: list[LineStatement] = []

    def append(self, statement: LineStatement) -> None:
        self._statements.append(statement)

    @property
    def statements(self) -> tuple[LineStatement, ...]:
        return tuple(self._statements)

    def instructions(self) -> Iterator[Instruction]:
        """Yield the instructions in source order, skipping other lines."""
        for statement in self._statements:
            if statement.instruction is not None:
                yield statement.instruction

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[LineStatement]:
        return iter(tuple(self._statements))

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return tuple(self._statements[index])
        return self._statements[index]

    def __repr__(self) -> str:
        return f"IntermediateRepresentation({len(self._statements)} statements)"

    def format_listing(self) -> str:
        """
        Render the IR as a listing, one row per statement.

        Columns: line number, opcode, mnemonic, operand, addressing mode,
        comment. Unknown opcodes show as "--".

        Example:
               1  $90  ldc.i3    5     immediate  ; push five
               2  $00  halt            inherent
        """
        rows = []
        for statement in self._statements:
            opcode = name = operand = mode = ""
            instruction = statement.instruction
            if instruction is not None:
                mnemonic = instruction.mnemonic
                opcode = f"${mnemonic.opcode:02X}" if mnemonic.opcode is not None else "--"
                name = mnemonic.name
                operand = instruction.operand.raw_text if instruction.operand else ""
                mode = str(mnemonic.mode)
            comment = statement.comment.text if statement.comment else ""
            row = f"{statement.line_number:4d}  {opcode:3}  {name:8}  {operand:4}  {mode:9}  {comment}"
            rows.append(row.rstrip())
        return "\n".join(rows)
