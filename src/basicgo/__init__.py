"""
basicgo - BASIC to Go Compiler
==============================

This package compiles programs written in a small BASIC dialect into
single-file Go programs. Compilation is a single pass: the parser reads
tokens with one token of lookahead and emits Go text as it recognizes each
construct, so no syntax tree is ever built.

Pipeline
--------
    BASIC Source → Lexer → Parser ⇄ Emitter → Go Source → (gofmt, go build)

Main Components
---------------
- **lexer**: Token catalog and on-demand tokenizer
- **parser**: Recursive descent translator with symbol and label checks
- **emitter**: Go fragment buffer and program skeleton
- **compiler**: Wires the three together for each compilation
- **toolchain**: Optional hand-off to gofmt and go build

Language
--------
    PRINT "text" | PRINT expression
    INPUT name
    LET name = expression
    IF comparison THEN ... [ELSE ...] ENDIF
    WHILE comparison REPEAT ... ENDWHILE
    FOR comparison REPEAT ... ENDFOR
    LABEL name / GOTO name

All numbers are float64 in the generated program.

Quick Start
-----------
    >>> from basicgo import compile_basic
    >>> print(compile_basic('PRINT "hello, world"'))

Or use the command-line tool:
    $ basicgo hello.bas
    $ basicgo --gofmt --build hello.bas

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "basicgo Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from basicgo.lexer import Lexer, Token, TokenType, KEYWORDS
from basicgo.emitter import Emitter
from basicgo.parser import Parser
from basicgo.compiler import (
    Compiler,
    CompilerOptions,
    CompileResult,
    compile_basic,
    compile_file,
)
from basicgo.errors import (
    BasicGoError,
    LexError,
    InvalidCharacterError,
    UnterminatedStringError,
    BasicSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    SemanticError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
    UnresolvedLabelsError,
    EmitterError,
    ToolchainError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Compiler
    "Compiler",
    "CompilerOptions",
    "CompileResult",
    "compile_basic",
    "compile_file",
    # Pipeline stages
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Parser",
    "Emitter",
    # Errors
    "BasicGoError",
    "LexError",
    "InvalidCharacterError",
    "UnterminatedStringError",
    "BasicSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "SemanticError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndeclaredLabelError",
    "UnresolvedLabelsError",
    "EmitterError",
    "ToolchainError",
]
