"""
basicgo Error Hierarchy
=======================

This module defines the exception hierarchy for the basicgo compiler.
All exceptions inherit from BasicGoError, allowing callers to catch every
compiler failure with a single except clause.

Exception Hierarchy
-------------------
BasicGoError (base)
├── LexError - malformed token
│   ├── InvalidCharacterError - character that cannot start a token
│   └── UnterminatedStringError - string literal runs into end of input
├── BasicSyntaxError - token sequence does not match the grammar
│   ├── UnexpectedTokenError - token cannot start/continue a production
│   └── MissingTokenError - required keyword or operator absent
├── SemanticError - grammar-valid program violating an invariant
│   ├── UndeclaredVariableError - variable read before assignment
│   ├── DuplicateLabelError - LABEL declared twice
│   ├── UndeclaredLabelError - GOTO to a label that is never declared
│   └── UnresolvedLabelsError - several undeclared labels at once
├── EmitterError - emitter used out of order
└── ToolchainError - gofmt / go build failed

Error Message Format
--------------------
The language has no line/column tracking, so errors identify the offending
lexeme (and token kind where one is involved) instead of a position:

    error: referencing variable before assignment: 'count'
    hint: assign it with LET or INPUT before reading it
"""

from typing import Optional, List


# =============================================================================
# Base Exception
# =============================================================================

class BasicGoError(Exception):
    """
    Base exception for all basicgo errors.

    Attributes:
        message: The error description
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with its optional hint.

        Example output:
            error: label 'top' already exists
            hint: label names must be unique within a program
        """
        parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(BasicGoError):
    """
    Malformed token in the source text.

    Raised by the lexer for:
        - Illegal character inside a string literal
        - Decimal point with no digit after it
        - Unterminated string literal
        - '!' not followed by '='
        - Any character that cannot start a token

    Attributes:
        lexeme: The offending text (may be a single character)
    """

    def __init__(self, message: str, lexeme: str = "", hint: Optional[str] = None):
        self.lexeme = lexeme
        super().__init__(message, hint=hint)


class InvalidCharacterError(LexError):
    """Character that cannot begin any token."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(
            f"unknown token: '{char}' (0x{ord(char):02X})",
            lexeme=char,
        )


class UnterminatedStringError(LexError):
    """
    String literal with no closing quote.

    The lexer bounds its string scan by the end of the source buffer
    and raises this instead of reading past the end marker.
    """

    def __init__(self, partial: str):
        super().__init__(
            "unterminated string literal",
            lexeme=partial,
            hint="add closing '\"' to complete the string",
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class BasicSyntaxError(BasicGoError):
    """
    Token sequence does not match the grammar.

    Named BasicSyntaxError so it does not shadow Python's builtin
    SyntaxError.

    Attributes:
        lexeme: Text of the offending token
        kind: Name of the offending token's kind (e.g. "IDENT", "EOF")
    """

    def __init__(
        self,
        message: str,
        lexeme: str = "",
        kind: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.lexeme = lexeme
        self.kind = kind
        super().__init__(message, hint=hint)


class UnexpectedTokenError(BasicSyntaxError):
    """Token that cannot start or continue the production being parsed."""

    def __init__(
        self,
        lexeme: str,
        kind: str,
        expected: Optional[str] = None,
        context: str = "statement",
    ):
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"invalid {context} at '{lexeme}' ({kind})",
            lexeme=lexeme,
            kind=kind,
            hint=hint,
        )


class MissingTokenError(BasicSyntaxError):
    """
    Required token is missing.

    Raised when a closing keyword (ENDIF, ENDWHILE, ENDFOR), the THEN/REPEAT
    of a header, the '=' of a LET, or a comparison operator is not found.
    """

    def __init__(self, expected: str, lexeme: str, kind: str):
        self.expected = expected
        super().__init__(
            f"expected {expected}, got '{lexeme}' ({kind})",
            lexeme=lexeme,
            kind=kind,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class SemanticError(BasicGoError):
    """
    Grammar-valid program that violates a local or whole-program rule.

    Attributes:
        lexeme: The variable or label name involved
    """

    def __init__(self, message: str, lexeme: str = "", hint: Optional[str] = None):
        self.lexeme = lexeme
        super().__init__(message, hint=hint)


class UndeclaredVariableError(SemanticError):
    """Variable read before any LET or INPUT bound it."""

    def __init__(self, name: str, similar_names: Optional[List[str]] = None):
        self.name = name
        self.similar_names = similar_names or []

        hint = "assign it with LET or INPUT before reading it"
        if self.similar_names:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_names[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"referencing variable before assignment: '{name}'",
            lexeme=name,
            hint=hint,
        )


class DuplicateLabelError(SemanticError):
    """LABEL declared a second time."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(
            f"label '{label}' already exists",
            lexeme=label,
            hint="label names must be unique within a program",
        )


class UndeclaredLabelError(SemanticError):
    """GOTO whose target label never appears in the program."""

    def __init__(self, label: str, similar_labels: Optional[List[str]] = None):
        self.label = label
        self.similar_labels = similar_labels or []

        # Auto-generate hint if similar labels found
        hint = None
        if self.similar_labels:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_labels[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"attempting to GOTO undeclared label '{label}'",
            lexeme=label,
            hint=hint,
        )


class UnresolvedLabelsError(SemanticError):
    """
    Several GOTO targets were never declared.

    Carries one UndeclaredLabelError per label. The message is the
    joined report of the individual errors.
    """

    def __init__(self, errors: List[UndeclaredLabelError]):
        self.errors = errors
        labels = ", ".join(f"'{e.label}'" for e in errors)
        super().__init__(f"{len(errors)} undeclared labels: {labels}")

    def _format_message(self) -> str:
        """Return every individual error followed by a summary line."""
        lines = [str(error) for error in self.errors]
        lines.append(f"{len(self.errors)} errors")
        return "\n".join(lines)


# =============================================================================
# Emitter and Toolchain Errors
# =============================================================================

class EmitterError(BasicGoError):
    """Emitter used after it was finalized."""
    pass


class ToolchainError(BasicGoError):
    """
    External Go tool failed.

    Raised when gofmt or go build is not installed, exits non-zero,
    or times out.

    Attributes:
        command: The command line that was run
        stderr: Captured standard error of the tool
        return_code: Exit status (None if the tool never ran)
    """

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        stderr: str = "",
        return_code: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.command = command or []
        self.stderr = stderr
        self.return_code = return_code
        super().__init__(message, hint=hint)

    def _format_message(self) -> str:
        """Append the tool's stderr to the base message."""
        message = super()._format_message()
        if self.stderr:
            message += "\n" + self.stderr.rstrip()
        return message
