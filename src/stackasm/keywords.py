"""
Stack Machine Instruction Set
=============================

This module defines the mnemonics of the toy stack machine together with
their opcodes and addressing modes, and the read-only ``KeywordTable``
the parser consults to validate instructions.

Addressing Modes
----------------
1. **INHERENT**: No operand (e.g. ``halt``, ``add``)
2. **IMMEDIATE**: One literal signed integer follows the mnemonic
   (e.g. ``ldc.i3 5``)

Opcode Layout
-------------
| Range       | Mode      | Group                              |
|-------------|-----------|------------------------------------|
| $00-$04     | inherent  | control (halt, pop, dup, exit, ret)|
| $0C-$1F     | inherent  | logic, arithmetic, shifts, tests   |
| $70         | immediate | enter.u5                           |
| $90-$A8     | immediate | ldc.i3, addv.u3, ldv.u3, stv.u3    |

The suffix of an immediate mnemonic names the width of its operand field
(``u5``: unsigned 5-bit, ``i3``: signed 3-bit). The front end does not
range-check operands; that belongs to code generation.
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """Addressing modes of the stack machine."""
    INHERENT = auto()   # No operand
    IMMEDIATE = auto()  # Literal signed integer operand

    def __str__(self) -> str:
        """Return human-readable name for listings and error messages."""
        return self.name.lower()


# =============================================================================
# Mnemonic
# =============================================================================

@dataclass(frozen=True)
class Mnemonic:
    """
    An instruction mnemonic bound to its opcode and addressing mode.

    Canonical instances live in the ``KeywordTable``. The parser also
    builds one per occurrence in the source; for those, ``opcode`` is
    None when the name is not a known instruction.

    Attributes:
        name: Textual name as written (e.g. "ldc.i3")
        opcode: Opcode byte, or None if unknown
        mode: Addressing mode
    """
    name: str
    opcode: Optional[int]
    mode: AddressingMode

    def __repr__(self) -> str:
        opcode = f"${self.opcode:02X}" if self.opcode is not None else "None"
        return f"Mnemonic({self.name!r}, opcode={opcode}, mode={self.mode})"


# =============================================================================
# Instruction Set
# =============================================================================
# Key: mnemonic text
# Value: (opcode, addressing mode)
# =============================================================================

INSTRUCTION_SET: dict[str, tuple[int, AddressingMode]] = {
    # Control
    "halt": (0x00, AddressingMode.INHERENT),
    "pop": (0x01, AddressingMode.INHERENT),
    "dup": (0x02, AddressingMode.INHERENT),
    "exit": (0x03, AddressingMode.INHERENT),
    "ret": (0x04, AddressingMode.INHERENT),

    # Logic
    "not": (0x0C, AddressingMode.INHERENT),
    "and": (0x0D, AddressingMode.INHERENT),
    "or": (0x0E, AddressingMode.INHERENT),
    "xor": (0x0F, AddressingMode.INHERENT),

    # Arithmetic
    "neg": (0x10, AddressingMode.INHERENT),
    "inc": (0x11, AddressingMode.INHERENT),
    "dec": (0x12, AddressingMode.INHERENT),
    "add": (0x13, AddressingMode.INHERENT),
    "sub": (0x14, AddressingMode.INHERENT),
    "mul": (0x15, AddressingMode.INHERENT),
    "div": (0x16, AddressingMode.INHERENT),
    "rem": (0x17, AddressingMode.INHERENT),
    "shl": (0x18, AddressingMode.INHERENT),
    "shr": (0x19, AddressingMode.INHERENT),

    # Comparisons (push 1 if true, 0 otherwise)
    "teq": (0x1A, AddressingMode.INHERENT),
    "tne": (0x1B, AddressingMode.INHERENT),
    "tlt": (0x1C, AddressingMode.INHERENT),
    "tgt": (0x1D, AddressingMode.INHERENT),
    "tle": (0x1E, AddressingMode.INHERENT),
    "tge": (0x1F, AddressingMode.INHERENT),

    # Immediate forms
    "enter.u5": (0x70, AddressingMode.IMMEDIATE),
    "ldc.i3": (0x90, AddressingMode.IMMEDIATE),
    "addv.u3": (0x98, AddressingMode.IMMEDIATE),
    "ldv.u3": (0xA0, AddressingMode.IMMEDIATE),
    "stv.u3": (0xA8, AddressingMode.IMMEDIATE),
}


# =============================================================================
# Keyword Table
# =============================================================================

class KeywordTable:
    """
    Read-only mapping from mnemonic text to its canonical ``Mnemonic``.

    Built once and never mutated afterwards. Lookup is exact by default;
    with ``case_sensitive=False`` names are folded to lower case both when
    the table is built and when it is queried.

    Usage:
        table = KeywordTable.default()
        info = table.lookup("ldc.i3")
        if info is not None:
            print(info.opcode, info.mode)
    """

    def __init__(self, mnemonics: Iterable[Mnemonic], case_sensitive: bool = True):
        """
        Initialize the table.

        Args:
            mnemonics: Canonical mnemonics to register
            case_sensitive: If False, lookups ignore letter case

        Raises:
            ValueError: If two mnemonics share a (folded) name
        """
        self._case_sensitive = case_sensitive
        entries: dict[str, Mnemonic] = {}
        for mnemonic in mnemonics:
            key = self._key(mnemonic.name)
            if key in entries:
                raise ValueError(f"duplicate mnemonic '{mnemonic.name}'")
            entries[key] = mnemonic
        self._entries: Mapping[str, Mnemonic] = MappingProxyType(entries)

    @classmethod
    def default(cls, case_sensitive: bool = True) -> "KeywordTable":
        """Build the table for the full stack machine instruction set."""
        return cls(
            (Mnemonic(name, opcode, mode) for name, (opcode, mode) in INSTRUCTION_SET.items()),
            case_sensitive=case_sensitive,
        )

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def _key(self, name: str) -> str:
        return name if self._case_sensitive else name.lower()

    def lookup(self, name: str) -> Optional[Mnemonic]:
        """Return the canonical mnemonic for ``name``, or None if unknown."""
        return self._entries.get(self._key(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
