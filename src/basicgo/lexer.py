"""
basicgo Lexer (Tokenizer)
=========================

This module converts BASIC source text into a stream of tokens for the
parser. Tokens are produced on demand: the parser pulls one token at a
time with next_token(), holding at most the current token and one token
of lookahead.

Token Categories
----------------
- Keywords: LABEL, GOTO, PRINT, INPUT, LET, IF, THEN, ELSE, ENDIF,
  WHILE, REPEAT, ENDWHILE, FOR, ENDFOR (case-sensitive, upper case)
- Identifiers: runs of ASCII letters that are not keywords
- Numbers: 123 or 3.14 (a decimal point needs at least one digit after it)
- Strings: "double quoted", no escapes
- Operators: = + - * / == != < <= > >=

Whitespace and Comments
-----------------------
Spaces, tabs, carriage returns and line feeds are all insignificant. Line
breaks are ordinary whitespace: the NEWLINE kind exists in the token
catalog but is never produced, and statements are delimited purely by the
grammar. A '#' starts a comment that runs to the end of the line.

String Restrictions
-------------------
String literals are copied verbatim into Go string literals, so characters
that would need escaping or would be read as format verbs are rejected:
carriage return, line feed, tab, backslash and percent sign.

Example Usage
-------------
>>> from basicgo.lexer import Lexer
>>> for token in Lexer('LET a = 1.5').tokenize():
...     print(token)
Token(LET, 'LET')
Token(IDENT, 'a')
Token(EQ, '=')
Token(NUMBER, '1.5')
Token(EOF)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from basicgo.errors import (
    LexError,
    InvalidCharacterError,
    UnterminatedStringError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Closed set of token kinds for the BASIC language.

    Keywords get their own kinds so the parser can dispatch on the
    current token's kind alone.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input (repeats once reached)
    NEWLINE = auto()        # Cataloged, never produced (line breaks are whitespace)

    # === Literals and Identifiers ===
    NUMBER = auto()         # 42, 3.14
    IDENT = auto()          # Variable and label names
    STRING = auto()         # "text" (text stored without quotes)

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    ELSE = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()
    FOR = auto()
    ENDFOR = auto()

    # === Operators ===
    EQ = auto()             # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /
    EQEQ = auto()           # ==
    NOTEQ = auto()          # !=
    LT = auto()             # <
    LTEQ = auto()           # <=
    GT = auto()             # >
    GTEQ = auto()           # >=


# =============================================================================
# Keyword and Operator Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "LABEL": TokenType.LABEL,
    "GOTO": TokenType.GOTO,
    "PRINT": TokenType.PRINT,
    "INPUT": TokenType.INPUT,
    "LET": TokenType.LET,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ENDIF": TokenType.ENDIF,
    "ELSE": TokenType.ELSE,
    "WHILE": TokenType.WHILE,
    "REPEAT": TokenType.REPEAT,
    "ENDWHILE": TokenType.ENDWHILE,
    "FOR": TokenType.FOR,
    "ENDFOR": TokenType.ENDFOR,
}

COMPARISON_OPERATORS: frozenset[TokenType] = frozenset({
    TokenType.EQEQ,
    TokenType.NOTEQ,
    TokenType.LT,
    TokenType.LTEQ,
    TokenType.GT,
    TokenType.GTEQ,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    Attributes:
        kind: The TokenType classification
        text: The lexeme (string literals without their quotes,
              empty for EOF)
    """
    kind: TokenType
    text: str

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.kind is TokenType.EOF:
            return "Token(EOF)"
        return f"Token({self.kind.name}, {self.text!r})"

    def is_keyword(self) -> bool:
        """Return True if this token is a language keyword."""
        return self.kind in KEYWORDS.values()

    def is_comparison_operator(self) -> bool:
        """Return True if this token is ==, !=, <, <=, > or >=."""
        return self.kind in COMPARISON_OPERATORS


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes BASIC source text.

    The source is copied once with a trailing newline appended, so the
    last line is always terminated. Reading past the end of the buffer
    yields the END_MARKER character, which scans as an EOF token; further
    calls keep returning EOF.

    Usage:
        lexer = Lexer(source_text)
        token = lexer.next_token()

    Attributes:
        source: The source text being tokenized (with terminator)
    """

    END_MARKER = "\0"

    WHITESPACE = " \t\r\n"

    # Characters that can start or continue an identifier
    IDENT_CHARS = string.ascii_letters

    # Characters rejected inside string literals
    ILLEGAL_STRING_CHARS = "\r\n\t\\%"

    SINGLE_CHAR_TOKENS = {
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
    }

    # first char -> (single-char kind, kind when followed by '=')
    EQ_SUFFIX_TOKENS = {
        "=": (TokenType.EQ, TokenType.EQEQ),
        "<": (TokenType.LT, TokenType.LTEQ),
        ">": (TokenType.GT, TokenType.GTEQ),
    }

    def __init__(self, source: str):
        """
        Initialize the lexer with source text.

        Args:
            source: The complete BASIC program
        """
        self.source = source + "\n"
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EOF.

        Yields:
            Token objects for each lexical element

        Raises:
            LexError: If malformed input is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next Token; an EOF token once the input is exhausted

        Raises:
            LexError: If malformed input is encountered
        """
        self._skip_whitespace_and_comments()

        char = self._peek()

        if char == self.END_MARKER:
            return Token(TokenType.EOF, "")

        if char in self.IDENT_CHARS:
            return self._scan_identifier()

        if char in string.digits:
            return self._scan_number()

        if char == '"':
            return self._scan_string()

        return self._scan_operator()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if the whole buffer has been consumed."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at the character at current position + offset.

        Returns END_MARKER past the end of the buffer.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return self.END_MARKER
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self._peek()
        if not self._at_end():
            self._pos += 1
        return char

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace (line breaks included) and # comments."""
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if char == "#":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_identifier(self) -> Token:
        """
        Scan an identifier or keyword.

        Keywords are matched case-sensitively, so 'print' is an
        identifier while 'PRINT' is a keyword.
        """
        start = self._pos
        while self._peek() in self.IDENT_CHARS:
            self._advance()

        text = self.source[start:self._pos]
        return Token(KEYWORDS.get(text, TokenType.IDENT), text)

    def _scan_number(self) -> Token:
        """
        Scan a numeric literal: digits, optionally '.' and more digits.

        Raises:
            LexError: If the decimal point is not followed by a digit
        """
        start = self._pos
        while self._peek() in string.digits:
            self._advance()

        if self._peek() == ".":
            self._advance()
            if self._peek() not in string.digits:
                raise LexError(
                    "illegal character in number: expected digit after decimal point",
                    lexeme=self.source[start:self._pos + 1],
                    hint="write 1.0 instead of 1.",
                )
            while self._peek() in string.digits:
                self._advance()

        return Token(TokenType.NUMBER, self.source[start:self._pos])

    def _scan_string(self) -> Token:
        """
        Scan a double-quoted string literal.

        The scan is bounded by the end of the buffer. Since the source
        always ends with a newline, an unclosed literal normally stops at
        that line break.

        Raises:
            UnterminatedStringError: If the line or buffer ends first
            LexError: On a tab, carriage return, backslash or percent sign
        """
        self._advance()  # consume opening "
        start = self._pos

        while not self._at_end():
            char = self._peek()

            if char == '"':
                text = self.source[start:self._pos]
                self._advance()  # consume closing "
                return Token(TokenType.STRING, text)

            if char == "\n":
                raise UnterminatedStringError(self.source[start:self._pos])

            if char in self.ILLEGAL_STRING_CHARS:
                raise LexError(
                    f"illegal character in string: {char!r}",
                    lexeme=char,
                    hint="tabs, backslashes and '%' are not allowed in strings",
                )

            self._advance()

        raise UnterminatedStringError(self.source[start:self._pos])

    def _scan_operator(self) -> Token:
        """
        Scan an operator.

        '=', '<' and '>' look one character ahead for a following '='.
        '!' is only valid as the first half of '!='.

        Raises:
            LexError: For '!' without '='
            InvalidCharacterError: For any character that starts no token
        """
        char = self._advance()

        if char in self.SINGLE_CHAR_TOKENS:
            return Token(self.SINGLE_CHAR_TOKENS[char], char)

        if char in self.EQ_SUFFIX_TOKENS:
            single, double = self.EQ_SUFFIX_TOKENS[char]
            if self._peek() == "=":
                self._advance()
                return Token(double, char + "=")
            return Token(single, char)

        if char == "!":
            if self._peek() == "=":
                self._advance()
                return Token(TokenType.NOTEQ, "!=")
            raise LexError(
                f"expected !=, got !{self._peek()!r}",
                lexeme="!",
                hint="there is no negation operator; use != for comparison",
            )

        raise InvalidCharacterError(char)
