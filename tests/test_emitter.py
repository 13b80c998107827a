"""
Tests for the Go code emitter.

Covers fragment accumulation, indentation, label placement, import
handling and the program skeleton written by finalize().
"""

import pytest

from basicgo.emitter import Emitter, GENERATED_HEADER
from basicgo.errors import EmitterError


class TestSkeleton:
    """Tests for the program skeleton."""

    def test_empty_program(self):
        """No fragments and no imports gives an empty main."""
        emitter = Emitter(generated_header=False)
        assert emitter.finalize() == "package main\n\nfunc main() {\n}\n"

    def test_generated_header(self):
        """The header comment is the first line by default."""
        go_source = Emitter().finalize()
        assert go_source.startswith(GENERATED_HEADER + "\n\npackage main\n")

    def test_import_block(self):
        """Required imports appear in a parenthesized block."""
        emitter = Emitter(generated_header=False)
        emitter.require_import("fmt")
        emitter.emit_line('fmt.Println("hi")')
        assert emitter.finalize() == (
            "package main\n"
            "\n"
            "import (\n"
            '\t"fmt"\n'
            ")\n"
            "\n"
            "func main() {\n"
            '\tfmt.Println("hi")\n'
            "}\n"
        )

    def test_imports_sorted(self):
        """Imports are written in sorted order regardless of request order."""
        emitter = Emitter(generated_header=False)
        emitter.require_import("os")
        emitter.require_import("fmt")
        assert emitter.imports == ["fmt", "os"]
        go_source = emitter.finalize()
        assert go_source.index('"fmt"') < go_source.index('"os"')

    def test_require_import_idempotent(self):
        """Requesting the same import twice records it once."""
        emitter = Emitter()
        emitter.require_import("fmt")
        emitter.require_import("fmt")
        assert emitter.imports == ["fmt"]
        assert emitter.finalize().count('"fmt"') == 1

    def test_unterminated_last_line(self):
        """A trailing partial line is closed before the final brace."""
        emitter = Emitter(generated_header=False)
        emitter.emit("x := 1")
        assert emitter.finalize().endswith("\tx := 1\n}\n")


class TestFragments:
    """Tests for emit(), emit_line() and indentation."""

    def _body(self, emitter: Emitter) -> str:
        go_source = emitter.finalize()
        start = go_source.index("func main() {\n") + len("func main() {\n")
        return go_source[start:-len("}\n")]

    def test_fragments_in_order(self):
        """Fragments on one line are concatenated in emission order."""
        emitter = Emitter(generated_header=False)
        emitter.emit("a")
        emitter.emit(" := ")
        emitter.emit("float64(1)")
        emitter.emit_line()
        assert self._body(emitter) == "\ta := float64(1)\n"

    def test_empty_emit_does_not_indent(self):
        """emit('') is a no-op."""
        emitter = Emitter(generated_header=False)
        emitter.emit("")
        emitter.emit_line("x")
        assert self._body(emitter) == "\tx\n"

    def test_nested_indentation(self):
        """indent() and dedent() change the prefix of following lines."""
        emitter = Emitter(generated_header=False)
        emitter.emit_line("for a < b {")
        emitter.indent()
        emitter.emit_line("if a > b {")
        emitter.indent()
        emitter.emit_line("a = b")
        emitter.dedent()
        emitter.emit_line("}")
        emitter.dedent()
        emitter.emit_line("}")
        assert self._body(emitter) == (
            "\tfor a < b {\n"
            "\t\tif a > b {\n"
            "\t\t\ta = b\n"
            "\t\t}\n"
            "\t}\n"
        )

    def test_custom_indent_unit(self):
        """The indentation text is configurable."""
        emitter = Emitter(indent_unit="    ", generated_header=False)
        emitter.emit_line("x")
        assert self._body(emitter) == "    x\n"

    def test_label_outdented(self):
        """Labels sit one level out from the surrounding code."""
        emitter = Emitter(generated_header=False)
        emitter.emit_label("top")
        emitter.emit_line("goto top")
        emitter.indent()
        emitter.emit_label("inner")
        emitter.dedent()
        assert self._body(emitter) == "top:\n\tgoto top\n\tinner:\n"

    def test_dedent_below_main_body(self):
        """dedent() cannot leave func main."""
        with pytest.raises(EmitterError):
            Emitter().dedent()


class TestFinalize:
    """Tests for the single-use contract of finalize()."""

    def test_finalize_twice(self):
        """A second finalize() is an error."""
        emitter = Emitter()
        emitter.finalize()
        with pytest.raises(EmitterError):
            emitter.finalize()

    def test_emit_after_finalize(self):
        """Fragments cannot be added once the program is produced."""
        emitter = Emitter()
        emitter.finalize()
        with pytest.raises(EmitterError):
            emitter.emit_line("x")
