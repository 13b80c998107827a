"""
Go Code Emitter
===============

The emitter accumulates fragments of Go source text while the parser
recognizes the program, plus the set of Go packages the fragments need.
Once parsing has succeeded the fragments are wrapped, exactly once, in a
fixed program skeleton:

    // Code generated by basicgo. DO NOT EDIT.

    package main

    import (
        "fmt"
    )

    func main() {
        <fragments in emission order>
    }

The emitter does no validation of what it is given; by the time
finalize() runs the parser has already checked grammar, symbols and
labels.

Indentation
-----------
Fragments are indented by nesting depth at the start of each line, using
the same layout gofmt produces (tabs, labels one level out), so the output
is readable without running a formatter. Depth starts at one because every
fragment lives inside func main.
"""

import logging

from basicgo.errors import EmitterError


logger = logging.getLogger(__name__)

GENERATED_HEADER = "// Code generated by basicgo. DO NOT EDIT."


class Emitter:
    """
    Append-only buffer of Go source fragments.

    Usage:
        emitter = Emitter()
        emitter.require_import("fmt")
        emitter.emit_line('fmt.Println("hi")')
        go_source = emitter.finalize()

    Attributes:
        indent_unit: Text inserted once per nesting level
        generated_header: Whether finalize() writes the "Code generated" line
    """

    def __init__(self, indent_unit: str = "\t", generated_header: bool = True):
        """
        Initialize an empty emitter.

        Args:
            indent_unit: Text for one level of indentation
            generated_header: Prefix the output with the generated-code marker
        """
        self.indent_unit = indent_unit
        self.generated_header = generated_header

        self._fragments: list[str] = []
        self._imports: set[str] = set()

        self._depth = 1
        self._at_line_start = True
        self._finalized = False

    # =========================================================================
    # Fragment Output
    # =========================================================================

    def emit(self, fragment: str) -> None:
        """Append raw text, indenting it if it starts a new line."""
        self._check_open()
        if not fragment:
            return
        if self._at_line_start:
            self._fragments.append(self.indent_unit * self._depth)
            self._at_line_start = False
        self._fragments.append(fragment)

    def emit_line(self, fragment: str = "") -> None:
        """Append text and terminate the current line."""
        self.emit(fragment)
        self._fragments.append("\n")
        self._at_line_start = True

    def emit_label(self, name: str) -> None:
        """Emit a label definition one level out from the current depth."""
        self._check_open()
        self._fragments.append(self.indent_unit * (self._depth - 1))
        self._fragments.append(f"{name}:\n")
        self._at_line_start = True

    def indent(self) -> None:
        """Increase nesting depth for the following lines."""
        self._depth += 1

    def dedent(self) -> None:
        """Decrease nesting depth for the following lines."""
        if self._depth <= 1:
            raise EmitterError("dedent below the body of func main")
        self._depth -= 1

    # =========================================================================
    # Imports
    # =========================================================================

    def require_import(self, name: str) -> None:
        """Record that the program needs a Go package. Idempotent."""
        if name not in self._imports:
            logger.debug(f"Import required: {name}")
        self._imports.add(name)

    @property
    def imports(self) -> list[str]:
        """Required packages in the order they are written out."""
        return sorted(self._imports)

    # =========================================================================
    # Finalization
    # =========================================================================

    def finalize(self) -> str:
        """
        Wrap all fragments in the program skeleton.

        Imports are sorted so that identical input always produces
        byte-identical output.

        Returns:
            The complete Go program text

        Raises:
            EmitterError: If called more than once
        """
        self._check_open()
        self._finalized = True

        parts = []

        if self.generated_header:
            parts.append(GENERATED_HEADER + "\n\n")

        parts.append("package main\n\n")

        if self._imports:
            parts.append("import (\n")
            for name in self.imports:
                parts.append(f'{self.indent_unit}"{name}"\n')
            parts.append(")\n\n")

        body = "".join(self._fragments)
        if body and not body.endswith("\n"):
            body += "\n"

        parts.append("func main() {\n")
        parts.append(body)
        parts.append("}\n")

        return "".join(parts)

    def _check_open(self) -> None:
        """Raise if the emitter has already produced its output."""
        if self._finalized:
            raise EmitterError("emitter has already been finalized")
