"""
basicgo Recursive Descent Parser
================================

This module implements a syntax-directed translator for the BASIC
language. There is no AST: as each grammar production is recognized the
parser immediately asks the Emitter to append the corresponding Go
fragment. Tokens are pulled from the Lexer with one token of lookahead
(current + peek), and the grammar is LL(1), so there is no backtracking.

Grammar (EBNF)
--------------
program    ::= {statement}
statement  ::= "PRINT" (string | expression)
             | "IF" comparison "THEN" {statement} ["ELSE" {statement}] "ENDIF"
             | "WHILE" comparison "REPEAT" {statement} "ENDWHILE"
             | "FOR" comparison "REPEAT" {statement} "ENDFOR"
             | "LABEL" ident
             | "GOTO" ident
             | "LET" ident "=" expression
             | "INPUT" ident
comparison ::= expression compop expression {compop expression}
expression ::= term {("+" | "-") term}
term       ::= unary {("*" | "/") unary}
unary      ::= ["+" | "-"] primary
primary    ::= number | string | ident

Translation
-----------
| BASIC                        | Go                                      |
|------------------------------|-----------------------------------------|
| PRINT "hi"                   | fmt.Println("hi")                       |
| PRINT a + 1                  | fmt.Printf("%v\\n", a + float64(1))      |
| IF a > 1 THEN ... ENDIF      | if a > float64(1) { ... }               |
| WHILE/FOR c REPEAT ... END*  | for c { ... }                           |
| LABEL top / GOTO top         | top: / goto top                         |
| LET a = 1 (first time)       | a := float64(1)                         |
| LET a = 2 (again)            | a = float64(2)                          |
| INPUT n (first time)         | var n float64 + fmt.Scanln read         |

State
-----
- symbols: names bound by LET or INPUT so far (gates every read)
- labels_declared: names declared with LABEL
- labels_gotoed: names used by GOTO, checked once after the whole program

Example Usage
-------------
>>> from basicgo.lexer import Lexer
>>> from basicgo.emitter import Emitter
>>> from basicgo.parser import Parser
>>> emitter = Emitter()
>>> Parser(Lexer('LET a = 1\\nPRINT a'), emitter).program()
>>> print(emitter.finalize())
"""

import logging
from typing import Callable, Optional

from basicgo.lexer import Lexer, Token, TokenType
from basicgo.emitter import Emitter
from basicgo.errors import (
    UnexpectedTokenError,
    MissingTokenError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
    UnresolvedLabelsError,
)


logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser that emits Go while it parses.

    One Parser serves one compilation; its symbol table and label sets
    are instance state and are never shared.

    Attributes:
        lexer: Token source
        emitter: Fragment sink
        symbols: Variable names bound so far
        labels_declared: Label names declared so far
        labels_gotoed: Label names referenced by GOTO, in first-use order
        token_count: Number of non-EOF tokens pulled from the lexer
    """

    def __init__(self, lexer: Lexer, emitter: Emitter):
        """
        Initialize the parser and prime current/peek tokens.

        Args:
            lexer: Lexer over the program text
            emitter: Emitter receiving the Go fragments

        Raises:
            LexError: If one of the first two tokens is malformed
        """
        self.lexer = lexer
        self.emitter = emitter

        self.symbols: set[str] = set()
        self.labels_declared: set[str] = set()
        self.labels_gotoed: dict[str, None] = {}

        self.token_count = 0

        self._statement_parsers: dict[TokenType, Callable[[], None]] = {
            TokenType.PRINT: self._parse_print,
            TokenType.IF: self._parse_if,
            TokenType.WHILE: self._parse_loop,
            TokenType.FOR: self._parse_loop,
            TokenType.LABEL: self._parse_label,
            TokenType.GOTO: self._parse_goto,
            TokenType.LET: self._parse_let,
            TokenType.INPUT: self._parse_input,
        }

        self.current_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None
        # Pull twice to fill both current and peek.
        self._next_token()
        self._next_token()

    # program ::= {statement}
    def program(self) -> None:
        """
        Parse the whole program, then check GOTO targets.

        Raises:
            LexError: On malformed tokens
            BasicSyntaxError: On grammar violations
            SemanticError: On symbol or label violations
        """
        logger.debug("PROGRAM")

        while not self._check(TokenType.EOF):
            self._statement()

        self._check_labels()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _check(self, *kinds: TokenType) -> bool:
        """Check if the current token is one of the given kinds."""
        return self.current_token.kind in kinds

    def _next_token(self) -> None:
        """Shift peek into current and pull a new peek from the lexer."""
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()
        if self.peek_token.kind is not TokenType.EOF:
            self.token_count += 1

    def _expect(self, kind: TokenType, expected: Optional[str] = None) -> Token:
        """
        Consume the current token, which must be of the given kind.

        Args:
            kind: Required token kind
            expected: Description for the error message (defaults to kind name)

        Returns:
            The consumed token

        Raises:
            MissingTokenError: If the current token is of another kind
        """
        token = self.current_token
        if token.kind is not kind:
            raise MissingTokenError(
                expected or kind.name,
                token.text,
                token.kind.name,
            )
        self._next_token()
        return token

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement(self) -> None:
        """Dispatch on the current token to the matching statement rule."""
        parse = self._statement_parsers.get(self.current_token.kind)
        if parse is None:
            raise UnexpectedTokenError(
                self.current_token.text,
                self.current_token.kind.name,
                expected="a statement keyword",
            )
        parse()

    def _block(self, *terminators: TokenType) -> None:
        """
        Parse statements until one of the terminators is current.

        The terminator itself is left for the caller to consume.

        Raises:
            MissingTokenError: If the input ends before a terminator
        """
        while not self._check(*terminators):
            if self._check(TokenType.EOF):
                raise MissingTokenError(
                    " or ".join(kind.name for kind in terminators),
                    self.current_token.text,
                    self.current_token.kind.name,
                )
            self._statement()

    # "PRINT" (string | expression)
    def _parse_print(self) -> None:
        logger.debug("STATEMENT-PRINT")
        self._next_token()
        self.emitter.require_import("fmt")

        if self._check(TokenType.STRING):
            self.emitter.emit_line(f'fmt.Println("{self.current_token.text}")')
            self._next_token()
        else:
            self.emitter.emit('fmt.Printf("%v\\n", ')
            self._expression()
            self.emitter.emit_line(")")

    # "IF" comparison "THEN" {statement} ["ELSE" {statement}] "ENDIF"
    def _parse_if(self) -> None:
        logger.debug("STATEMENT-IF")
        self._next_token()

        self.emitter.emit("if ")
        self._comparison()
        self._expect(TokenType.THEN)
        self.emitter.emit_line(" {")

        self.emitter.indent()
        self._block(TokenType.ELSE, TokenType.ENDIF)
        self.emitter.dedent()

        if self._check(TokenType.ELSE):
            logger.debug("STATEMENT-ELSE")
            self._next_token()
            self.emitter.emit_line("} else {")

            self.emitter.indent()
            self._block(TokenType.ENDIF)
            self.emitter.dedent()

        self._expect(TokenType.ENDIF)
        self.emitter.emit_line("}")

    # ("WHILE" | "FOR") comparison "REPEAT" {statement} ("ENDWHILE" | "ENDFOR")
    def _parse_loop(self) -> None:
        """
        Parse a pretest loop.

        WHILE and FOR are two spellings of the same loop and emit the
        same Go shape; each must be closed by its own END keyword. FOR has
        no counter initialization or increment, so the body must update
        whatever the comparison tests.
        """
        opener = self.current_token.kind
        closer = TokenType.ENDFOR if opener is TokenType.FOR else TokenType.ENDWHILE
        logger.debug(f"STATEMENT-{opener.name}")
        self._next_token()

        self.emitter.emit("for ")
        self._comparison()
        self._expect(TokenType.REPEAT)
        self.emitter.emit_line(" {")

        self.emitter.indent()
        self._block(closer)
        self.emitter.dedent()

        self._expect(closer)
        self.emitter.emit_line("}")

    # "LABEL" ident
    def _parse_label(self) -> None:
        logger.debug("STATEMENT-LABEL")
        self._next_token()

        name = self._expect(TokenType.IDENT, "label name").text
        if name in self.labels_declared:
            raise DuplicateLabelError(name)
        self.labels_declared.add(name)

        self.emitter.emit_label(name)

    # "GOTO" ident
    def _parse_goto(self) -> None:
        logger.debug("STATEMENT-GOTO")
        self._next_token()

        name = self._expect(TokenType.IDENT, "label name").text
        self.labels_gotoed[name] = None

        self.emitter.emit_line(f"goto {name}")

    # "LET" ident "=" expression
    def _parse_let(self) -> None:
        """
        Parse an assignment.

        The first LET of a name emits a Go short declaration (:=), later
        ones a plain assignment. The name is bound only after its
        expression is parsed, so it cannot be read on its own first line.
        """
        logger.debug("STATEMENT-LET")
        self._next_token()

        name = self._expect(TokenType.IDENT, "variable name").text
        self._expect(TokenType.EQ, "'='")

        if name in self.symbols:
            self.emitter.emit(f"{name} = ")
        else:
            self.emitter.emit(f"{name} := ")

        self._expression()
        self.emitter.emit_line()

        self.symbols.add(name)

    # "INPUT" ident
    def _parse_input(self) -> None:
        """
        Parse a numeric read from standard input.

        Unparseable input leaves the variable at 0, mirroring how a failed
        read is handled in the generated program rather than aborting it.
        """
        logger.debug("STATEMENT-INPUT")
        self._next_token()
        self.emitter.require_import("fmt")

        name = self._expect(TokenType.IDENT, "variable name").text

        if name not in self.symbols:
            self.emitter.emit_line(f"var {name} float64")
            self.symbols.add(name)

        self.emitter.emit_line(f"if _, err := fmt.Scanln(&{name}); err != nil {{")
        self.emitter.indent()
        self.emitter.emit_line(f"{name} = 0")
        self.emitter.dedent()
        self.emitter.emit_line("}")

    # =========================================================================
    # Expressions
    # =========================================================================

    # comparison ::= expression (("==" | "!=" | ">" | ">=" | "<" | "<=") expression)+
    def _comparison(self) -> None:
        """
        Parse one or more comparisons.

        Chains such as a < b < c are emitted exactly as written; no
        conjunction is inserted between the pairwise comparisons.

        Raises:
            MissingTokenError: If no comparison operator follows the
                first expression
        """
        self._expression()

        if not self.current_token.is_comparison_operator():
            raise MissingTokenError(
                "comparison operator",
                self.current_token.text,
                self.current_token.kind.name,
            )

        while self.current_token.is_comparison_operator():
            self.emitter.emit(f" {self.current_token.text} ")
            self._next_token()
            self._expression()

    # expression ::= term {("-" | "+") term}
    def _expression(self) -> None:
        self._term()

        while self._check(TokenType.PLUS, TokenType.MINUS):
            self.emitter.emit(f" {self.current_token.text} ")
            self._next_token()
            self._term()

    # term ::= unary {("/" | "*") unary}
    def _term(self) -> None:
        self._unary()

        while self._check(TokenType.ASTERISK, TokenType.SLASH):
            self.emitter.emit(f" {self.current_token.text} ")
            self._next_token()
            self._unary()

    # unary ::= ["+" | "-"] primary
    def _unary(self) -> None:
        if self._check(TokenType.PLUS, TokenType.MINUS):
            self.emitter.emit(self.current_token.text)
            self._next_token()

        self._primary()

    # primary ::= number | string | ident
    def _primary(self) -> None:
        """
        Parse a literal or variable reference.

        Every number becomes an explicit float64 since the generated
        program has no integer type.

        Raises:
            UndeclaredVariableError: If a variable is read before binding
            UnexpectedTokenError: If the token cannot start an operand
        """
        token = self.current_token

        if token.kind is TokenType.NUMBER:
            self.emitter.emit(f"float64({token.text})")
        elif token.kind is TokenType.STRING:
            self.emitter.emit(f'"{token.text}"')
        elif token.kind is TokenType.IDENT:
            if token.text not in self.symbols:
                raise UndeclaredVariableError(
                    token.text,
                    similar_names=self._find_similar_names(token.text, self.symbols),
                )
            self.emitter.emit(token.text)
        else:
            raise UnexpectedTokenError(
                token.text,
                token.kind.name,
                expected="a number, string or variable",
                context="expression",
            )

        self._next_token()

    # =========================================================================
    # Whole-Program Checks
    # =========================================================================

    def _check_labels(self) -> None:
        """
        Make sure every GOTO target was declared somewhere.

        Raises:
            UndeclaredLabelError: If exactly one target is missing
            UnresolvedLabelsError: If several targets are missing
        """
        errors = [
            UndeclaredLabelError(
                label,
                similar_labels=self._find_similar_names(label, self.labels_declared),
            )
            for label in self.labels_gotoed
            if label not in self.labels_declared
        ]

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise UnresolvedLabelsError(errors)

    def _find_similar_names(self, name: str, candidates: set[str]) -> list[str]:
        """
        Find known names close to an unknown one, for error hints.

        Uses a simple edit distance heuristic.
        """
        name_lower = name.lower()
        similar = []

        for candidate in sorted(candidates):
            candidate_lower = candidate.lower()
            if (
                candidate_lower == name_lower or
                abs(len(candidate) - len(name)) <= 1 and
                self._edit_distance(name_lower, candidate_lower) <= 2
            ):
                similar.append(candidate)

        return similar[:3]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein edit distance between two strings."""
        if len(s1) < len(s2):
            s1, s2 = s2, s1

        distances = range(len(s2) + 1)
        for i, c1 in enumerate(s1):
            new_distances = [i + 1]
            for j, c2 in enumerate(s2):
                if c1 == c2:
                    new_distances.append(distances[j])
                else:
                    new_distances.append(1 + min((
                        distances[j],
                        distances[j + 1],
                        new_distances[-1]
                    )))
            distances = new_distances

        return distances[-1]
