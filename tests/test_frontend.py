# =============================================================================
# test_frontend.py - Front End Integration Tests
# =============================================================================
# Tests for the complete pipeline: source text or file -> IR + errors.
# =============================================================================

import pytest
from stackasm import (
    ConfigError,
    EofPolicy,
    FrontEnd,
    FrontEndConfig,
    SourceReadError,
    parse_file,
    parse_source,
)
from stackasm.keywords import AddressingMode, KeywordTable, Mnemonic


PROGRAM = """\
; compute 3 + 2
    enter.u5 2      ; frame
    ldc.i3 3
    ldc.i3 2
    add
    stv.u3 0

    halt            ; done
"""


# =============================================================================
# Full Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Complete programs through the front end."""

    def test_valid_program(self):
        front = FrontEnd()
        ir = front.parse_string(PROGRAM)
        assert not front.has_errors()
        assert len(ir) == 8
        names = [i.mnemonic.name for i in ir.instructions()]
        assert names == ["enter.u5", "ldc.i3", "ldc.i3", "add", "stv.u3", "halt"]

    def test_modes(self):
        ir = FrontEnd().parse_string(PROGRAM)
        modes = [i.mode for i in ir.instructions()]
        assert modes == [
            AddressingMode.IMMEDIATE,
            AddressingMode.IMMEDIATE,
            AddressingMode.IMMEDIATE,
            AddressingMode.INHERENT,
            AddressingMode.IMMEDIATE,
            AddressingMode.INHERENT,
        ]

    def test_program_with_errors(self):
        source = "ldc.i3\nhalt 1\nfoo\n5\n@\nhalt\n"
        front = FrontEnd()
        ir = front.parse_string(source, "bad.asm")
        assert len(ir) == 6
        assert [str(e) for e in front.get_errors()] == [
            "bad.asm:1:1: error: Instruction requires an operand.",
            "bad.asm:2:1: error: Inherent instruction must not have an operand.",
            "bad.asm:3:1: error: Invalid mnemonic or directive.",
            "bad.asm:4:1: error: Operand without instruction.",
            "bad.asm:5:1: error: Unknown token",
        ]

    def test_error_report(self):
        front = FrontEnd()
        front.parse_string("foo\n", "x.asm")
        assert front.get_error_report() == (
            "x.asm:1:1: error: Invalid mnemonic or directive.\n1 error"
        )

    def test_runs_are_independent(self):
        front = FrontEnd()
        front.parse_string("foo\n")
        assert front.has_errors()
        front.parse_string("halt\n")
        assert not front.has_errors()
        assert len(front.get_ir()) == 1

    def test_crlf_source(self):
        result = parse_source("ldc.i3 1 ; one\r\nhalt\r\n")
        assert result.ok
        assert result.ir[0].comment.text == "; one"
        assert len(result.ir) == 2


# =============================================================================
# Convenience Function Tests
# =============================================================================

class TestConvenienceFunctions:

    def test_parse_source(self):
        result = parse_source("halt\n")
        assert result.ok
        assert result.ir[0].instruction.mnemonic.opcode == 0x00

    def test_parse_source_errors(self):
        result = parse_source("foo\n")
        assert not result.ok
        assert result.errors[0].text == "Invalid mnemonic or directive."

    def test_parse_source_with_config(self):
        config = FrontEndConfig(case_sensitive=False, eof_policy=EofPolicy.REPORT)
        result = parse_source("HALT\nDUP", config=config)
        assert len(result.ir) == 1
        assert [e.text for e in result.errors] == ["Missing line terminator."]


# =============================================================================
# Configuration Tests
# =============================================================================

class TestConfiguration:

    def test_case_insensitive_config(self):
        front = FrontEnd(FrontEndConfig(case_sensitive=False))
        front.parse_string("HALT\n")
        assert not front.has_errors()

    def test_custom_keywords(self):
        keywords = KeywordTable([Mnemonic("push", 0x01, AddressingMode.IMMEDIATE)])
        front = FrontEnd(keywords=keywords)
        front.parse_string("push 4\nhalt\n")
        assert [e.text for e in front.get_errors()] == ["Invalid mnemonic or directive."]

    def test_empty_keyword_table_is_used(self):
        front = FrontEnd(keywords=KeywordTable([]))
        front.parse_string("halt\n")
        assert len(front.keywords) == 0
        assert [e.text for e in front.get_errors()] == ["Invalid mnemonic or directive."]

    def test_keywords_matching_config_case(self):
        keywords = KeywordTable.default(case_sensitive=False)
        front = FrontEnd(FrontEndConfig(case_sensitive=False), keywords)
        front.parse_string("HALT\n")
        assert not front.has_errors()

    def test_keywords_conflicting_with_config_case(self):
        with pytest.raises(ConfigError):
            FrontEnd(FrontEndConfig(case_sensitive=False), KeywordTable.default())
        with pytest.raises(ConfigError):
            FrontEnd(keywords=KeywordTable.default(case_sensitive=False))

    def test_custom_comment_marker(self):
        result = parse_source("halt # stop\n", config=FrontEndConfig(comment_marker="#"))
        assert result.ok
        assert result.ir[0].comment.text == "# stop"


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFileIO:

    def test_parse_file(self, tmp_path):
        path = tmp_path / "prog.asm"
        path.write_text(PROGRAM)
        result = parse_file(path)
        assert result.ok
        assert len(result.ir) == 8

    def test_positions_use_filename(self, tmp_path):
        path = tmp_path / "bad.asm"
        path.write_text("halt\nfoo\n")
        result = parse_file(str(path))
        assert result.errors[0].position.filename == str(path)
        assert result.errors[0].position.line == 2

    def test_crlf_file_preserved(self, tmp_path):
        path = tmp_path / "dos.asm"
        path.write_bytes(b"halt ; x\r\ndup\r\n")
        result = parse_file(path)
        assert result.ok
        assert result.ir[0].comment.text == "; x"
        assert result.ir[1].instruction.position.line == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError) as excinfo:
            parse_file(tmp_path / "missing.asm")
        assert "missing.asm" in str(excinfo.value)

    def test_directory_is_not_a_source(self, tmp_path):
        with pytest.raises(SourceReadError):
            FrontEnd().parse_file(tmp_path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.asm"
        path.write_bytes(b"halt\n\xff\xfe\n")
        with pytest.raises(SourceReadError):
            parse_file(path)

    def test_latin1_encoding(self, tmp_path):
        path = tmp_path / "latin.asm"
        path.write_bytes("halt ; caf\xe9\n".encode("latin-1"))
        result = parse_file(path, FrontEndConfig(encoding="latin-1"))
        assert result.ir[0].comment.text == "; caf\xe9"


# =============================================================================
# Listing Tests
# =============================================================================

class TestListing:

    def test_listing_rows(self):
        ir = FrontEnd().parse_string("ldc.i3 5 ; push\nhalt\n\nfoo\n")
        lines = ir.format_listing().splitlines()
        assert len(lines) == 4
        assert lines[0].split() == ["1", "$90", "ldc.i3", "5", "immediate", ";", "push"]
        assert lines[1].split() == ["2", "$00", "halt", "inherent"]
        assert lines[2].strip() == "3"
        assert lines[3].split() == ["4", "--", "foo", "inherent"]

    def test_empty_listing(self):
        assert FrontEnd().parse_string("").format_listing() == ""
