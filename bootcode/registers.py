"""
Boot Code VM: Register Set

Register model:
  ACC    accumulator, signed, unbounded (Python int)
  PC     program counter, index of the next instruction
  steps  number of instructions executed since reset

Only acc writes ACC. Every opcode writes PC.
"""


class Registers:
    """Boot code CPU register set."""

    __slots__ = ('ACC', 'PC', 'steps')

    def __init__(self):
        self.ACC: int = 0    # Accumulator
        self.PC: int = 0     # Program counter
        self.steps: int = 0  # Executed instruction count

    def snapshot(self) -> tuple:
        """Return (ACC, PC) for comparisons in tests and traces."""
        return (self.ACC, self.PC)

    def display(self) -> str:
        """Format register state for the instruction trace."""
        return f"PC={self.PC:<5d} ACC={self.ACC:+d} steps={self.steps}"

    def reset(self):
        """Reset to power-on state: ACC=0, PC=0."""
        self.ACC = 0
        self.PC = 0
        self.steps = 0
