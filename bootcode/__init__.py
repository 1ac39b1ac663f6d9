"""
KingAI Boot Code VM
===================
A three-opcode interpreter with infinite-loop detection and a
single-fault repair search for corrupted boot code.

Architecture:
    ┌───────────┐    ┌──────────────┐    ┌─────────────────────┐
    │ Boot code │───>│    Loader    │───>│       Machine       │
    │  (text)   │    │ (Instruction)│    │ run / step / repair │
    └───────────┘    └──────────────┘    └─────────────────────┘

    - instruction.py: Opcode enum + frozen Instruction dataclass
    - registers.py:   ACC / PC / step counter
    - machine.py:     fetch/execute loop, loop detection, repair search
    - loader.py:      text -> [Instruction]; not needed by the machine
    - log.py:         rich console + file logging for the CLI
"""

__version__ = "0.1.0"
__author__ = "KingAI"

from typing import Iterable

from .instruction import Instruction, Opcode, acc, jmp, nop
from .registers import Registers
from .machine import (
    Machine, StopReason, RunResult, RepairStatus, RepairResult, ProgramCounterFault,
)
from .loader import ProgramParseError, parse_instruction, parse_program, load_program

__all__ = [
    'Instruction', 'Opcode', 'acc', 'jmp', 'nop',
    'Registers',
    'Machine', 'StopReason', 'RunResult', 'RepairStatus', 'RepairResult',
    'ProgramCounterFault',
    'ProgramParseError', 'parse_instruction', 'parse_program', 'load_program',
    'run', 'repair',
]


def run(program: Iterable[Instruction]) -> RunResult:
    """Run a program on a fresh machine until it terminates, loops or faults."""
    return Machine(program).run_detect_loop()


def repair(program: Iterable[Instruction]) -> RepairResult:
    """Search for the single jmp/nop swap that makes a program terminate."""
    return Machine(program).repair()
