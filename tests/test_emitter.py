"""
Emitter Test Suite
==================

Tests for the two-buffer C source emitter: buffer separation, output
ordering and persistence through finalize().
"""

import pytest
from pathlib import Path

from teenyc.emitter import Emitter
from teenyc.errors import OutputError, TeenyError


class TestBuffers:
    """Tests for declare(), write() and write_line()."""

    def test_new_emitter_is_empty(self):
        emitter = Emitter()
        assert emitter.header == ""
        assert emitter.body == ""
        assert emitter.output() == ""

    def test_declare_appends_line_to_header(self):
        emitter = Emitter()
        emitter.declare("float x;")
        assert emitter.header == "float x;\n"
        assert emitter.body == ""

    def test_write_is_verbatim(self):
        emitter = Emitter()
        emitter.write("a")
        emitter.write(" = ")
        emitter.write("1")
        assert emitter.body == "a = 1"

    def test_write_line_appends_newline(self):
        emitter = Emitter()
        emitter.write("x = ")
        emitter.write_line("1;")
        assert emitter.body == "x = 1;\n"

    def test_header_always_precedes_body(self):
        """Declarations added after body text still come first."""
        emitter = Emitter()
        emitter.write_line("x = 1;")
        emitter.declare("float x;")
        emitter.write_line("y = 2;")
        emitter.declare("float y;")
        assert emitter.output() == "float x;\nfloat y;\nx = 1;\ny = 2;\n"


class TestFinalize:
    """Tests for writing the generated program to disk."""

    def test_finalize_writes_file(self, tmp_path):
        path = tmp_path / "out.c"
        emitter = Emitter(path)
        emitter.declare("#include <stdio.h>")
        emitter.write_line("return 0;")

        text = emitter.finalize()

        assert text == "#include <stdio.h>\nreturn 0;\n"
        assert path.read_text(encoding="utf-8") == text

    def test_finalize_accepts_string_path(self, tmp_path):
        emitter = Emitter(str(tmp_path / "out.c"))
        emitter.write_line("}")
        emitter.finalize()
        assert isinstance(emitter.output_path, Path)
        assert (tmp_path / "out.c").read_text() == "}\n"

    def test_finalize_overwrites(self, tmp_path):
        path = tmp_path / "out.c"
        path.write_text("old contents that are longer\n")
        emitter = Emitter(path)
        emitter.write_line("new")
        emitter.finalize()
        assert path.read_text() == "new\n"

    def test_finalize_without_path(self):
        with pytest.raises(OutputError):
            Emitter().finalize()

    def test_finalize_missing_directory(self, tmp_path):
        emitter = Emitter(tmp_path / "missing" / "out.c")
        with pytest.raises(OutputError) as exc_info:
            emitter.finalize()
        assert "missing" in exc_info.value.path
        assert "cannot write output file" in str(exc_info.value)

    def test_finalize_onto_directory(self, tmp_path):
        with pytest.raises(OutputError):
            Emitter(tmp_path).finalize()

    def test_output_error_is_teeny_error(self):
        with pytest.raises(TeenyError):
            Emitter().finalize()
