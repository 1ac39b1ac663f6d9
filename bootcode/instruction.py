"""
Boot Code VM: Instruction Set

Three opcodes, one signed integer argument each:

  acc  Accumulate   ACC += arg; PC += 1
  jmp  Jump         PC += arg (signed, backward or forward)
  nop  No operation PC += 1   (argument carried but ignored)

The set is closed. jmp and nop are the only opcodes the repair search
may swap; acc is never touched.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass


class Opcode(enum.Enum):
    ACC = "acc"
    JMP = "jmp"
    NOP = "nop"

    @property
    def mnemonic(self) -> str:
        return self.value

    @classmethod
    def from_mnemonic(cls, text: str) -> Opcode:
        """Look up an opcode by its source mnemonic (case-insensitive)."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"Unknown mnemonic: '{text}'") from None


# Jump <-> NoOp swap table used by the repair search
_FLIP = {
    Opcode.JMP: Opcode.NOP,
    Opcode.NOP: Opcode.JMP,
}


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction."""
    opcode: Opcode
    argument: int = 0

    def __post_init__(self):
        if not isinstance(self.opcode, Opcode):
            raise TypeError(f"opcode must be an Opcode, got {self.opcode!r}")
        # bool is an int subclass but never a valid argument
        if isinstance(self.argument, bool) or not isinstance(self.argument, int):
            raise TypeError(f"argument must be an int, got {self.argument!r}")

    @property
    def is_control_flow(self) -> bool:
        """True for jmp/nop, the instructions a repair may flip."""
        return self.opcode in _FLIP

    def flipped(self) -> Instruction:
        """Return a copy with jmp/nop swapped. acc comes back unchanged."""
        if not self.is_control_flow:
            return self
        return Instruction(_FLIP[self.opcode], self.argument)

    def __str__(self) -> str:
        return f"{self.opcode.mnemonic} {self.argument:+d}"


# Convenience constructors, mostly for tests and hand-built programs

def acc(value: int) -> Instruction:
    return Instruction(Opcode.ACC, value)


def jmp(offset: int) -> Instruction:
    return Instruction(Opcode.JMP, offset)


def nop(value: int = 0) -> Instruction:
    return Instruction(Opcode.NOP, value)
