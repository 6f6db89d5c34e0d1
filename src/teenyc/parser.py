"""
Teeny Recursive Descent Parser and C Code Generator
===================================================

This module recognizes Teeny programs and translates them to C in a
single pass. There is no AST: every grammar rule writes its C fragment
to the Emitter at the moment the rule is recognized.

Grammar (EBNF)
--------------
program     ::= {NEWLINE} {statement} EOF
statement   ::= "PRINT" (expression | STRING) nl
              | "IF" comparison "THEN" nl {statement} "ENDIF" nl
              | "WHILE" comparison "REPEAT" nl {statement} "ENDWHILE" nl
              | "LABEL" IDENT nl
              | "GOTO" IDENT nl
              | "LET" IDENT "=" expression nl
              | "INPUT" IDENT nl
comparison  ::= expression (CMP expression)+
expression  ::= term {("+" | "-") term}
term        ::= unary {("*" | "/") unary}
unary       ::= ["+" | "-"] primary
primary     ::= NUMBER | IDENT
nl          ::= NEWLINE+

CMP is one of == != < <= > >=. Comparators chain left to right and are
passed through to C unchanged, so 'a == b < c' becomes 'a==b<c'.

Expressions are written as their token spellings with no spacing, with
two adjustments so that C reads them the way Teeny does:

- a sign directly after the same binary operator is separated by a
  space ('x - -1' becomes 'x- -1', not the decrement 'x--1');
- numbers lose redundant leading zeros ('010' becomes '10', which C
  would otherwise read as octal).

Reserved Names
--------------
Teeny names become C names unchanged. Names that the generated program
cannot use are rejected with ReservedNameError: C keywords (int, for,
return, ...), object-like macros from <stdio.h> (EOF, NULL, stdin, ...)
and, for variables, the names main(), its parameters and the I/O calls
already use (main, argc, argv, printf, scanf). Labels live in their own
C namespace, so only keywords and macros are off limits for them.

Translation
-----------
| Teeny               | C                                        |
|---------------------|------------------------------------------|
| LET x = e           | x = e;             (+ 'float x;' once)   |
| INPUT x             | if (0 == scanf("%f", &x)) { ... }        |
| PRINT "s"           | printf("s\\n");                           |
| PRINT e             | printf("%.2f\\n", (float)(e));            |
| IF c THEN ... ENDIF | if (c) { ... }                           |
| WHILE c REPEAT ...  | while (c) { ... }                        |
| LABEL l / GOTO l    | l: / goto l;                             |

Example Usage
-------------
    emitter = Emitter()
    Parser(Lexer('LET x = 2 * 3\\nPRINT x\\n'), emitter).parse()
    print(emitter.output())
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from teenyc.emitter import Emitter
from teenyc.errors import (
    SourceLocation,
    TeenySyntaxError,
    UnexpectedTokenError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndefinedLabelError,
    ReservedNameError,
)
from teenyc.lexer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)


DEFAULT_MAX_NESTING_DEPTH = 200
DEFAULT_FLOAT_FORMAT = "%.2f"

PROLOGUE = (
    "#include <stdio.h>",
    "int main(int argc, char *argv[]) {",
)

EPILOGUE = (
    "return 0;",
    "}",
)

# C99 keywords a Teeny identifier can spell (no underscores in Teeny)
C_KEYWORDS = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "inline", "int", "long", "register", "restrict", "return", "short",
    "signed", "sizeof", "static", "struct", "switch", "typedef", "union",
    "unsigned", "void", "volatile", "while",
})

# Object-like macros from <stdio.h>, likewise without underscores
STDIO_MACROS = frozenset({
    "EOF", "NULL", "BUFSIZ", "stdin", "stdout", "stderr",
})

# Names the generated main() already uses in the ordinary namespace
GENERATED_NAMES = frozenset({"main", "argc", "argv", "printf", "scanf"})

RESERVED_LABELS = C_KEYWORDS | STDIO_MACROS
RESERVED_VARIABLES = RESERVED_LABELS | GENERATED_NAMES


def c_number(spelling: str) -> str:
    """Spell a Teeny number so C reads it as decimal ('010' -> '10')."""
    integer, point, fraction = spelling.partition(".")
    return (integer.lstrip("0") or "0") + point + fraction


# =============================================================================
# Compilation Context
# =============================================================================

@dataclass
class ParseContext:
    """
    Names seen during one compilation.

    All three tables are flat: Teeny has a single scope. Each maps a name
    to the location of its first occurrence, in first-seen order.

    Attributes:
        variables: Variables introduced by LET or INPUT
        declared_labels: Labels introduced by LABEL
        referenced_labels: Labels named by GOTO
    """
    variables: dict[str, SourceLocation] = field(default_factory=dict)
    declared_labels: dict[str, SourceLocation] = field(default_factory=dict)
    referenced_labels: dict[str, SourceLocation] = field(default_factory=dict)

    def unresolved_labels(self) -> list[str]:
        """GOTO targets with no matching LABEL, in order of first reference."""
        return [
            name for name in self.referenced_labels
            if name not in self.declared_labels
        ]


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Single-pass Teeny to C translator.

    The parser keeps one lookahead token, pulled from the lexer on demand,
    and advances only through check() and match(). The first error of any
    kind propagates out of parse(); whatever the emitter holds at that
    point is not a valid program.

    Attributes:
        lexer: Token source
        emitter: Destination for generated C
        context: Symbol and label tables for this compilation
        current: The lookahead token
    """

    def __init__(
        self,
        lexer: Lexer,
        emitter: Emitter,
        context: Optional[ParseContext] = None,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
        float_format: str = DEFAULT_FLOAT_FORMAT,
    ):
        self.lexer = lexer
        self.emitter = emitter
        self.context = context if context is not None else ParseContext()
        self.max_nesting_depth = max_nesting_depth
        self.float_format = float_format

        self._depth = 0
        self._source_lines: Optional[list[str]] = None
        self.current: Token = self.lexer.next_token()

    def parse(self) -> None:
        """
        Translate the whole program into the emitter.

        Raises:
            LexicalError: On a malformed lexeme
            TeenySyntaxError: When a token does not fit the grammar
            SemanticError: On undeclared variables, duplicate labels, or
                GOTO targets still undeclared once the program has ended
        """
        while self.check(TokenType.NEWLINE):
            self.advance()

        self._parse_program()
        self._check_labels()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def check(self, kind: TokenType) -> bool:
        """True if the lookahead token is of the given kind."""
        return self.current.type == kind

    def advance(self) -> Token:
        """Consume the lookahead token and pull the next one."""
        token = self.current
        self.current = self.lexer.next_token()
        return token

    def match(self, kind: TokenType) -> Token:
        """
        Consume the lookahead token, which must be of the given kind.

        Raises:
            UnexpectedTokenError: If the lookahead is of any other kind
        """
        if not self.check(kind):
            raise self._unexpected(kind.describe())
        return self.advance()

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            expected,
            self.current.describe(),
            self.current.location,
            self._source_line(self.current.line),
        )

    def _source_line(self, line: int) -> Optional[str]:
        """Source text of a line, for error context."""
        if self._source_lines is None:
            self._source_lines = self.lexer.source.split("\n")
        if 0 < line <= len(self._source_lines):
            return self._source_lines[line - 1]
        return None

    # =========================================================================
    # Program and Statements
    # =========================================================================

    def _parse_program(self) -> None:
        """program ::= {statement} EOF"""
        for line in PROLOGUE:
            self.emitter.declare(line)

        while not self.check(TokenType.EOF):
            self._parse_statement()

        for line in EPILOGUE:
            self.emitter.write_line(line)

    def _parse_statement(self) -> None:
        """Dispatch on the statement keyword, then require a line end."""
        handlers = {
            TokenType.PRINT: self._parse_print,
            TokenType.IF: self._parse_if,
            TokenType.WHILE: self._parse_while,
            TokenType.LABEL: self._parse_label,
            TokenType.GOTO: self._parse_goto,
            TokenType.LET: self._parse_let,
            TokenType.INPUT: self._parse_input,
        }

        handler = handlers.get(self.current.type)
        if handler is None:
            raise self._unexpected("a statement")

        handler()
        self._parse_newline()

    def _parse_newline(self) -> None:
        """nl ::= NEWLINE+"""
        self.match(TokenType.NEWLINE)
        while self.check(TokenType.NEWLINE):
            self.advance()

    def _parse_print(self) -> None:
        """PRINT (expression | STRING)"""
        self.match(TokenType.PRINT)

        if self.check(TokenType.STRING):
            text = self.advance().spelling
            self.emitter.write_line(f'printf("{text}\\n");')
        else:
            self.emitter.write(f'printf("{self.float_format}\\n", (float)(')
            self._parse_expression()
            self.emitter.write_line("));")

    def _parse_if(self) -> None:
        """IF comparison THEN nl {statement} ENDIF"""
        self.match(TokenType.IF)
        self.emitter.write("if (")
        self._parse_comparison()
        self.match(TokenType.THEN)
        self._parse_newline()
        self.emitter.write_line(") {")

        self._parse_block(TokenType.ENDIF)
        self.emitter.write_line("}")

    def _parse_while(self) -> None:
        """WHILE comparison REPEAT nl {statement} ENDWHILE"""
        self.match(TokenType.WHILE)
        self.emitter.write("while (")
        self._parse_comparison()
        self.match(TokenType.REPEAT)
        self._parse_newline()
        self.emitter.write_line(") {")

        self._parse_block(TokenType.ENDWHILE)
        self.emitter.write_line("}")

    def _parse_block(self, terminator: TokenType) -> None:
        """Statements up to and including the terminator keyword."""
        self._depth += 1
        if self._depth > self.max_nesting_depth:
            raise TeenySyntaxError(
                f"blocks nested too deeply (limit is {self.max_nesting_depth})",
                self.current.location,
                source_line=self._source_line(self.current.line),
            )

        while not self.check(terminator):
            if self.check(TokenType.EOF):
                raise self._unexpected(terminator.describe())
            self._parse_statement()

        self.match(terminator)
        self._depth -= 1

    def _parse_label(self) -> None:
        """LABEL IDENT"""
        self.match(TokenType.LABEL)
        token = self.match(TokenType.IDENT)
        self._check_name(token, RESERVED_LABELS)
        name = token.spelling

        if name in self.context.declared_labels:
            raise DuplicateLabelError(
                name,
                token.location,
                self.context.declared_labels[name],
                self._source_line(token.line),
            )

        self.context.declared_labels[name] = token.location
        logger.debug(f"Declared label '{name}' at {token.location}")
        self.emitter.write_line(f"{name}:")

    def _parse_goto(self) -> None:
        """GOTO IDENT (resolved after the whole program is parsed)"""
        self.match(TokenType.GOTO)
        token = self.match(TokenType.IDENT)
        self._check_name(token, RESERVED_LABELS)

        self.context.referenced_labels.setdefault(token.spelling, token.location)
        self.emitter.write_line(f"goto {token.spelling};")

    def _parse_let(self) -> None:
        """LET IDENT "=" expression"""
        self.match(TokenType.LET)
        token = self.match(TokenType.IDENT)
        self._declare_variable(token)

        self.emitter.write(f"{token.spelling} = ")
        self.match(TokenType.EQ)
        self._parse_expression()
        self.emitter.write_line(";")

    def _parse_input(self) -> None:
        """
        INPUT IDENT

        A failed scanf() leaves the variable at 0 and discards the
        offending word, so the next INPUT reads fresh input.
        """
        self.match(TokenType.INPUT)
        token = self.match(TokenType.IDENT)
        self._declare_variable(token)

        name = token.spelling
        self.emitter.write_line(f'if (0 == scanf("%f", &{name})) {{')
        self.emitter.write_line(f"{name} = 0;")
        self.emitter.write_line('scanf("%*s");')
        self.emitter.write_line("}")

    def _declare_variable(self, token: Token) -> None:
        """Add a variable to the symbol set and header on first sight."""
        if token.spelling in self.context.variables:
            return

        self._check_name(token, RESERVED_VARIABLES)
        self.context.variables[token.spelling] = token.location
        logger.debug(f"Declared variable '{token.spelling}' at {token.location}")
        self.emitter.declare(f"float {token.spelling};")

    def _check_name(self, token: Token, reserved: frozenset) -> None:
        if token.spelling in reserved:
            raise ReservedNameError(
                token.spelling,
                token.location,
                self._source_line(token.line),
            )

    def _check_labels(self) -> None:
        """Every GOTO target must be declared somewhere in the program."""
        for name in self.context.unresolved_labels():
            location = self.context.referenced_labels[name]
            raise UndefinedLabelError(
                name,
                location,
                self._source_line(location.line),
            )

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_comparison(self) -> None:
        """comparison ::= expression (CMP expression)+"""
        self._parse_expression()

        if not self.current.type.is_comparison:
            raise self._unexpected("a comparison operator")

        while self.current.type.is_comparison:
            self.emitter.write(self.advance().spelling)
            self._parse_expression()

    def _parse_expression(self) -> None:
        """expression ::= term {("+" | "-") term}"""
        self._parse_term()

        while self.check(TokenType.PLUS) or self.check(TokenType.MINUS):
            operator = self.advance()
            self.emitter.write(operator.spelling)
            # 'x - -1' must not fuse into C's 'x--1'
            if self.check(operator.type):
                self.emitter.write(" ")
            self._parse_term()

    def _parse_term(self) -> None:
        """term ::= unary {("*" | "/") unary}"""
        self._parse_unary()

        while self.check(TokenType.ASTERISK) or self.check(TokenType.SLASH):
            self.emitter.write(self.advance().spelling)
            self._parse_unary()

    def _parse_unary(self) -> None:
        """unary ::= ["+" | "-"] primary"""
        if self.check(TokenType.PLUS) or self.check(TokenType.MINUS):
            self.emitter.write(self.advance().spelling)
        self._parse_primary()

    def _parse_primary(self) -> None:
        """primary ::= NUMBER | IDENT"""
        if self.check(TokenType.NUMBER):
            self.emitter.write(c_number(self.advance().spelling))
            return

        if self.check(TokenType.IDENT):
            token = self.current
            if token.spelling not in self.context.variables:
                raise UndeclaredVariableError(
                    token.spelling,
                    token.location,
                    self._source_line(token.line),
                    known_names=self.context.variables,
                )
            self.emitter.write(self.advance().spelling)
            return

        raise self._unexpected("a number or variable")
