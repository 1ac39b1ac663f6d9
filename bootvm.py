#!/usr/bin/env python3
"""
bootvm: KingAI Boot Code VM CLI

Usage:
    python bootvm.py <program.txt> [--repair] [--trace] [--listing]
                                   [--verbose] [--log-dir DIR]

Runs the program until it terminates or loops and prints the outcome:
    TERMINATED acc=5
    LOOPED acc=5
    FAULT acc=3 pc=-2

With --repair, searches for the single jmp/nop swap that lets the
program terminate:
    REPAIRED acc=8 index=7 (jmp -4 -> nop -4)
    EXHAUSTED (4 candidates tried)

Exit codes:
    0  terminated / repaired      3  looped
    1  file or parse error        4  program counter fault
    2  internal error             5  repair exhausted

Examples:
    python bootvm.py boot.txt
    python bootvm.py boot.txt --repair --trace
    python bootvm.py boot.txt --listing
"""

import argparse
import logging
import sys
from pathlib import Path

from bootcode import __version__
from bootcode import config
from bootcode.loader import load_program, ProgramParseError
from bootcode.log import setup_logging
from bootcode.machine import Machine, StopReason

log = logging.getLogger("bootcode.cli")

_RUN_EXIT = {
    StopReason.TERMINATED: config.EXIT_OK,
    StopReason.LOOPED: config.EXIT_LOOPED,
    StopReason.FAULT: config.EXIT_FAULT,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bootvm",
        description="KingAI Boot Code VM: run, detect loops, repair one corrupted jmp/nop",
    )
    parser.add_argument("input", help="Boot code program file (one instruction per line)")
    parser.add_argument("--repair", action="store_true",
                        help="Search for the single jmp/nop swap that makes the program terminate")
    parser.add_argument("--trace", action="store_true",
                        help="Print the instruction trace of the final run")
    parser.add_argument("--listing", action="store_true",
                        help="Print the parsed program with indices and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log run and repair details to the console")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Also write a timestamped debug log into this directory")
    parser.add_argument("--version", action="version",
                        version=f"bootvm {__version__} (KingAI)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    console_level = config.VERBOSE_CONSOLE_LEVEL if args.verbose else config.CONSOLE_LEVEL
    setup_logging(console_level=console_level, log_dir=args.log_dir)

    try:
        program = load_program(args.input)
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return config.EXIT_INPUT
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return config.EXIT_INPUT
    except ProgramParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return config.EXIT_INPUT

    vm = Machine(program)
    log.debug("loaded %d instructions from %s", len(vm), args.input)

    if args.listing:
        print(vm.listing())
        return config.EXIT_OK

    vm.enable_trace(args.trace)

    try:
        if args.repair:
            result = vm.repair()
            code = config.EXIT_OK if result.repaired else config.EXIT_EXHAUSTED
        else:
            result = vm.run_detect_loop()
            code = _RUN_EXIT[result.reason]
    except Exception as e:
        log.exception("internal error while executing %s", args.input)
        print(f"Internal VM error: {e}", file=sys.stderr)
        return config.EXIT_INTERNAL

    if args.trace and vm.get_trace():
        print(vm.get_trace())
    print(result)
    return code


if __name__ == "__main__":
    sys.exit(main())
