"""
Boot Code VM: Main Machine Class

Execution model:
  1. Check PC: exactly len(program) means the program finished
  2. Fetch instruction at PC (anything else out of range is a fault)
  3. Execute handler → update ACC / PC
  4. Record the new PC; a PC seen before means an infinite loop

Stop reasons:
  - TERMINATED:  PC landed one past the last instruction
  - LOOPED:      PC about to revisit an instruction already executed
  - FAULT:       PC left [0, len(program)] (jump before start / past end)

Repair search:
  The program is assumed to hold exactly one corrupted jmp/nop. Candidates
  are tried in ascending index order; each one swaps jmp<->nop in place,
  resets the registers and runs with loop detection. The first candidate
  that terminates wins. A failing candidate is swapped back before the
  next one, so at most one slot differs from the loaded program at any
  time.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .instruction import Instruction, Opcode
from .registers import Registers

log = logging.getLogger(__name__)


class StopReason(Enum):
    TERMINATED = 'TERMINATED'
    LOOPED = 'LOOPED'
    FAULT = 'FAULT'


class RepairStatus(Enum):
    REPAIRED = 'REPAIRED'
    EXHAUSTED = 'EXHAUSTED'


class ProgramCounterFault(Exception):
    """Raised when PC is outside the program and is not the end marker."""
    def __init__(self, pc: int, length: int):
        self.pc = pc
        self.length = length
        super().__init__(f"PC={pc} outside program (valid 0..{length - 1}, end={length})")


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run with loop detection."""
    reason: StopReason
    accumulator: int
    pc: int
    steps: int
    visited: Tuple[int, ...] = ()

    @property
    def terminated(self) -> bool:
        return self.reason is StopReason.TERMINATED

    @property
    def looped(self) -> bool:
        return self.reason is StopReason.LOOPED

    def __str__(self) -> str:
        if self.reason is StopReason.FAULT:
            return f"FAULT acc={self.accumulator} pc={self.pc}"
        return f"{self.reason.value} acc={self.accumulator}"


@dataclass(frozen=True)
class RepairResult:
    """Outcome of the single-fault repair search.

    On EXHAUSTED the accumulator, index and instructions are all None.
    """
    status: RepairStatus
    accumulator: Optional[int] = None
    index: Optional[int] = None
    original: Optional[Instruction] = None
    instructions: Optional[Tuple[Instruction, ...]] = None
    candidates_tried: int = 0

    @property
    def repaired(self) -> bool:
        return self.status is RepairStatus.REPAIRED

    @property
    def replacement(self) -> Optional[Instruction]:
        if self.instructions is None or self.index is None:
            return None
        return self.instructions[self.index]

    def __str__(self) -> str:
        if not self.repaired:
            return f"{self.status.value} ({self.candidates_tried} candidates tried)"
        return (f"{self.status.value} acc={self.accumulator} index={self.index} "
                f"({self.original} -> {self.replacement})")


class Machine:
    """Boot code virtual machine.

    Usage:
        vm = Machine(program)
        result = vm.run_detect_loop()
        print(result)            # LOOPED acc=5

        fixed = Machine(program).repair()
        print(fixed.accumulator)  # 8
    """

    def __init__(self, instructions: Iterable[Instruction]):
        # Private copy: nothing outside the machine can change the program
        self._program: List[Instruction] = list(instructions)
        for i, ins in enumerate(self._program):
            if not isinstance(ins, Instruction):
                raise TypeError(f"Program slot {i} is not an Instruction: {ins!r}")

        self.regs = Registers()

        # Trace output
        self._trace = False
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Program access
    # ══════════════════════════════════════════════

    def __len__(self) -> int:
        return len(self._program)

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        """Read-only view of the current program."""
        return tuple(self._program)

    @property
    def accumulator(self) -> int:
        return self.regs.ACC

    @property
    def program_counter(self) -> int:
        return self.regs.PC

    @property
    def finished(self) -> bool:
        """True when PC sits exactly one past the last instruction."""
        return self.regs.PC == len(self._program)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def fetch(self) -> Instruction:
        """Return the instruction at PC.

        Raises ProgramCounterFault for any PC outside 0..len-1, including
        the end marker. Callers check ``finished`` first.
        """
        pc = self.regs.PC
        if not 0 <= pc < len(self._program):
            raise ProgramCounterFault(pc, len(self._program))
        return self._program[pc]

    def step(self):
        """Execute one instruction at PC."""
        pc = self.regs.PC
        ins = self.fetch()

        self._dispatch[ins.opcode](ins.argument)
        self.regs.steps += 1

        if self._trace:
            self._trace_output.append(f"{pc:5d}: {str(ins):10s} {self.regs.display()}")

    def run_detect_loop(self) -> RunResult:
        """Run until the program ends, loops or faults.

        The PC reached after each step is recorded. Reaching a recorded PC
        again stops the run before that instruction executes again, so at
        most len(program) + 1 steps are taken per run.
        """
        visited = {}   # dict keeps insertion order
        steps = 0
        log.debug("run start: pc=%d acc=%d len=%d", self.regs.PC, self.regs.ACC, len(self))

        while True:
            if self.finished:
                reason = StopReason.TERMINATED
                break
            try:
                self.step()
                steps += 1
            except ProgramCounterFault as e:
                log.debug("run fault: %s", e)
                reason = StopReason.FAULT
                break
            pc = self.regs.PC
            if pc in visited:
                reason = StopReason.LOOPED
                break
            visited[pc] = None

        result = RunResult(
            reason=reason,
            accumulator=self.regs.ACC,
            pc=self.regs.PC,
            steps=steps,
            visited=tuple(visited),
        )
        log.debug("run stop: %s after %d steps", result, result.steps)
        return result

    run = run_detect_loop

    # ══════════════════════════════════════════════
    # Repair search
    # ══════════════════════════════════════════════

    def repair(self) -> RepairResult:
        """Find the single jmp/nop swap that makes the program terminate.

        Candidates are tried lowest index first; the first one that
        terminates is kept in the program and reported. If none do, the
        program is left as loaded and EXHAUSTED is returned.
        """
        tried = 0
        for i, original in enumerate(self._program):
            if not original.is_control_flow:
                continue
            tried += 1

            self._program[i] = original.flipped()
            self.reset()
            result = self.run_detect_loop()
            log.debug("repair candidate %d: %s -> %s: %s",
                      i, original, self._program[i], result.reason.value)

            if result.terminated:
                log.info("repair found at index %d (%s -> %s), acc=%d",
                         i, original, self._program[i], result.accumulator)
                return RepairResult(
                    status=RepairStatus.REPAIRED,
                    accumulator=result.accumulator,
                    index=i,
                    original=original,
                    instructions=tuple(self._program),
                    candidates_tried=tried,
                )

            # Undo before trying the next slot
            self._program[i] = original

        self.reset()
        log.info("repair exhausted: %d candidates, none terminate", tried)
        return RepairResult(status=RepairStatus.EXHAUSTED, candidates_tried=tried)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> Dict[Opcode, Callable[[int], None]]:
        return {
            Opcode.ACC: self._op_acc,
            Opcode.JMP: self._op_jmp,
            Opcode.NOP: self._op_nop,
        }

    def _op_acc(self, arg: int):
        self.regs.ACC += arg
        self.regs.PC += 1

    def _op_jmp(self, arg: int):
        self.regs.PC += arg

    def _op_nop(self, arg: int):
        self.regs.PC += 1

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Enable instruction trace logging."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def listing(self) -> str:
        """Program listing with indices, one instruction per line."""
        width = len(str(max(len(self._program) - 1, 0)))
        return '\n'.join(f"{i:{width}d}: {ins}" for i, ins in enumerate(self._program))

    def reset(self):
        """Reset registers to ACC=0, PC=0. The program is left alone."""
        self.regs.reset()
        self._trace_output.clear()
