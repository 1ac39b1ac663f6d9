"""
Tests for the boot code text loader.
"""

import pytest

from bootcode import ProgramParseError, load_program, parse_instruction, parse_program
from bootcode import Opcode, acc, jmp, nop


SAMPLE_TEXT = """\
nop +0
acc +1
jmp +4
acc +3
jmp -3
acc -99
acc +1
jmp -4
acc +6
"""


class TestParseInstruction:
    def test_signed_arguments(self):
        assert parse_instruction("jmp -4") == jmp(-4)
        assert parse_instruction("acc +1") == acc(1)
        assert parse_instruction("nop 0") == nop(0)

    def test_case_and_spacing(self):
        ins = parse_instruction("  JMP\t+12  ")
        assert ins.opcode is Opcode.JMP
        assert ins.argument == 12

    def test_unknown_mnemonic(self):
        with pytest.raises(ProgramParseError, match="Unknown mnemonic: 'hlt'"):
            parse_instruction("hlt +0", 3)

    def test_missing_argument(self):
        with pytest.raises(ProgramParseError) as exc:
            parse_instruction("jmp", 5)
        assert exc.value.line_num == 5
        assert str(exc.value).startswith("Line 5:")

    def test_extra_field(self):
        with pytest.raises(ProgramParseError):
            parse_instruction("acc +1 +2")

    def test_bad_argument(self):
        with pytest.raises(ProgramParseError, match="bad argument '\\+x'"):
            parse_instruction("acc +x")

    def test_no_line_number_prefix_without_line(self):
        with pytest.raises(ProgramParseError) as exc:
            parse_instruction("acc")
        assert not str(exc.value).startswith("Line")


class TestParseProgram:
    def test_sample(self):
        program = parse_program(SAMPLE_TEXT)
        assert len(program) == 9
        assert program[0] == nop(0)
        assert program[5] == acc(-99)
        assert program[7] == jmp(-4)

    def test_skips_blanks_and_comments(self):
        program = parse_program("# boot code\n\nacc +1\n   \n# end\njmp -1\n")
        assert program == [acc(1), jmp(-1)]

    def test_error_line_counts_skipped_lines(self):
        with pytest.raises(ProgramParseError) as exc:
            parse_program("# header\n\nacc +1\nbogus\n")
        assert exc.value.line_num == 4
        assert exc.value.line_text == "bogus"

    def test_empty(self):
        assert parse_program("") == []


class TestLoadProgram:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "boot.txt"
        path.write_text(SAMPLE_TEXT, encoding="utf-8")
        assert load_program(path) == parse_program(SAMPLE_TEXT)

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "boot.txt"
        path.write_text("acc +5\n", encoding="utf-8")
        assert load_program(str(path)) == [acc(5)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_program(tmp_path / "nope.txt")
