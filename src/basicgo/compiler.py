"""
basicgo Compiler Main Module
============================

This module provides the main compiler interface. It wires a fresh
Lexer, Parser and Emitter together for each compilation:

    Source → Lexer → Parser ⇄ Emitter → Go source

Usage
-----
Command line:
    $ basicgo hello.bas -o hello.go

Programmatic:
    >>> from basicgo import compile_basic
    >>> go_source = compile_basic('PRINT "hello"')

Error Handling
--------------
Compilation stops at the first problem. Every failure is raised as a
BasicGoError subclass (LexError, BasicSyntaxError, SemanticError), and
no output text is produced for a failed compilation: the emitter is only
finalized after the whole program has parsed and its labels have been
checked.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from basicgo.lexer import Lexer
from basicgo.parser import Parser
from basicgo.emitter import Emitter


logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        generated_header: Start the output with the standard Go
                          "Code generated ... DO NOT EDIT." marker
        indent: Text used for one level of indentation in the output
    """
    generated_header: bool = True
    indent: str = "\t"


@dataclass
class CompileResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename (or "<input>")
        success: True if compilation succeeded
        go_source: Generated Go program
        token_count: Number of tokens read (EOF excluded)
        variables: Variable names bound by the program, sorted
        labels: Label names declared by the program, sorted
        imports: Go packages the program imports, sorted
    """
    filename: str = "<input>"
    success: bool = False
    go_source: str = ""
    token_count: int = 0
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)


class Compiler:
    """
    BASIC to Go compiler.

    A Compiler holds only its options; every call to compile_source()
    builds its own Lexer, Parser and Emitter, so one Compiler can be
    reused and several compilations can run side by side.

    Example:
        compiler = Compiler()
        result = compiler.compile_source('PRINT "hi"')
        print(result.go_source)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        """
        Initialize the compiler.

        Args:
            options: Compiler configuration (uses defaults if None)
        """
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompileResult:
        """
        Compile BASIC source text to Go.

        Args:
            source: The complete BASIC program
            filename: Source name for log messages

        Returns:
            CompileResult containing the Go program and statistics

        Raises:
            BasicGoError: If compilation fails
        """
        logger.debug(f"Compiling {filename} ({len(source)} characters)")

        lexer = Lexer(source)
        emitter = Emitter(
            indent_unit=self.options.indent,
            generated_header=self.options.generated_header,
        )
        parser = Parser(lexer, emitter)

        parser.program()

        result = CompileResult(
            filename=filename,
            success=True,
            go_source=emitter.finalize(),
            token_count=parser.token_count,
            variables=sorted(parser.symbols),
            labels=sorted(parser.labels_declared),
            imports=emitter.imports,
        )

        logger.info(
            f"Compiled {filename}: {result.token_count} tokens, "
            f"{len(result.variables)} variables, {len(result.labels)} labels"
        )
        return result

    def compile_file(self, filepath: str | Path) -> CompileResult:
        """
        Compile a BASIC source file to Go.

        Args:
            filepath: Path to the source file (read as UTF-8)

        Returns:
            CompileResult containing the Go program and statistics

        Raises:
            BasicGoError: If compilation fails
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_basic(source: str, options: Optional[CompilerOptions] = None) -> str:
    """
    Compile BASIC source text to Go source text.

    This is the primary high-level interface.

    Args:
        source: The complete BASIC program
        options: Compiler configuration (uses defaults if None)

    Returns:
        Generated Go program

    Raises:
        BasicGoError: If compilation fails

    Example:
        >>> go_source = compile_basic('''
        ... LET a = 0
        ... PRINT a
        ... ''')
    """
    return Compiler(options).compile_source(source).go_source


def compile_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile a BASIC source file, optionally writing the Go output.

    Args:
        filepath: Path to the BASIC source file
        output_path: Where to write the Go program (not written if None)
        options: Compiler configuration (uses defaults if None)

    Returns:
        Generated Go program

    Raises:
        BasicGoError: If compilation fails
        FileNotFoundError: If the source file does not exist

    Example:
        >>> go_source = compile_file("fib.bas", "fib.go")
    """
    result = Compiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.go_source, encoding="utf-8")
        logger.debug(f"Wrote {len(result.go_source)} bytes to {output_path}")

    return result.go_source
