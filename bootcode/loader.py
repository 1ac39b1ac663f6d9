"""
Boot Code VM: Program Loader

Turns boot code text into a list of Instructions. One instruction per
line:

    nop +0
    acc +1
    jmp -4

The argument is a signed decimal; a leading '+' is optional. Blank lines
and lines starting with '#' are skipped. Line numbers in errors are
1-based and count every source line, skipped ones included.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Union

from . import config
from .instruction import Instruction, Opcode

log = logging.getLogger(__name__)


class ProgramParseError(Exception):
    """Raised on a malformed program line."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


def parse_instruction(text: str, line_num: int = 0) -> Instruction:
    """Parse a single ``<mnemonic> <signed int>`` line."""
    fields = text.split()
    if len(fields) != 2:
        raise ProgramParseError(
            f"expected '<mnemonic> <argument>', got {len(fields)} field(s): '{text.strip()}'",
            line_num, text)

    mnem, arg = fields
    try:
        opcode = Opcode.from_mnemonic(mnem)
    except ValueError as e:
        raise ProgramParseError(str(e), line_num, text) from None

    try:
        value = int(arg, 10)
    except ValueError:
        raise ProgramParseError(f"{mnem}: bad argument '{arg}'", line_num, text) from None

    return Instruction(opcode, value)


def parse_program(source: str) -> List[Instruction]:
    """Parse boot code text into an ordered instruction list."""
    program = []
    for line_num, line in enumerate(source.splitlines(), start=1):
        s = line.strip()
        if not s or s.startswith(config.COMMENT_PREFIX):
            continue
        program.append(parse_instruction(s, line_num))
    log.debug("parsed %d instructions", len(program))
    return program


def load_program(path: Union[str, Path]) -> List[Instruction]:
    """Read and parse a boot code file."""
    text = Path(path).read_text(encoding=config.PROGRAM_ENCODING)
    log.debug("loaded %s (%d bytes)", path, len(text))
    return parse_program(text)
