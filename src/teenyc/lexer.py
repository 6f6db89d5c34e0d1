"""
Teeny Lexer (Tokenizer)
=======================

This module implements the lexer for Teeny, a tiny structured BASIC.
It converts source text into tokens on demand: the parser pulls one
token at a time with next_token(), so the lexer never holds more than
its cursor.

Token Categories
----------------
- Keywords: LABEL, GOTO, PRINT, INPUT, LET, IF, THEN, ENDIF,
  WHILE, REPEAT, ENDWHILE (upper case only)
- Identifiers: a letter followed by letters or digits
- Numbers: 42, 3.14 (no exponent, no sign)
- Strings: "double quoted", without escapes
- Operators: + - * / = == != < <= > >=
- Newline: statements are line terminated

Comments
--------
'#' starts a comment that runs to the end of the line. The newline
itself is still a token.

Example Usage
-------------
>>> from teenyc.lexer import Lexer
>>> lexer = Lexer('LET x = 1.5 # one and a half')
>>> for token in lexer.tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENT, 'x', 1:5)
Token(EQ, '=', 1:7)
Token(NUMBER, '1.5', 1:9)
Token(NEWLINE, '\\n', 1:29)
Token(EOF, '', 2:1)
"""

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from teenyc.errors import (
    SourceLocation,
    UnsupportedCharacterError,
    InvalidStringCharacterError,
    MalformedNumberError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token kinds for the Teeny language.

    Keywords get their own kinds so the parser can dispatch on the
    current token without comparing spellings.
    """

    # === Structural Tokens ===
    EOF = auto()
    NEWLINE = auto()

    # === Literals and Names ===
    NUMBER = auto()
    IDENT = auto()
    STRING = auto()

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

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

    def describe(self) -> str:
        """Human-readable name used in parser error messages."""
        if self in _SYMBOLS:
            return f"'{_SYMBOLS[self]}'"
        if self in _DESCRIPTIONS:
            return _DESCRIPTIONS[self]
        return f"'{self.name}'"

    @property
    def is_comparison(self) -> bool:
        return self in COMPARISON_OPERATORS


_SYMBOLS = {
    TokenType.EQ: "=",
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.ASTERISK: "*",
    TokenType.SLASH: "/",
    TokenType.EQEQ: "==",
    TokenType.NOTEQ: "!=",
    TokenType.LT: "<",
    TokenType.LTEQ: "<=",
    TokenType.GT: ">",
    TokenType.GTEQ: ">=",
}

_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.NEWLINE: "newline",
    TokenType.NUMBER: "number",
    TokenType.IDENT: "identifier",
    TokenType.STRING: "string",
}

COMPARISON_OPERATORS = frozenset({
    TokenType.EQEQ,
    TokenType.NOTEQ,
    TokenType.LT,
    TokenType.LTEQ,
    TokenType.GT,
    TokenType.GTEQ,
})


# =============================================================================
# Keyword Mapping
# =============================================================================

# Exact, case-sensitive spellings. 'print' and 'PRINTX' are identifiers.
KEYWORDS: dict[str, TokenType] = {
    "LABEL": TokenType.LABEL,
    "GOTO": TokenType.GOTO,
    "PRINT": TokenType.PRINT,
    "INPUT": TokenType.INPUT,
    "LET": TokenType.LET,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ENDIF": TokenType.ENDIF,
    "WHILE": TokenType.WHILE,
    "REPEAT": TokenType.REPEAT,
    "ENDWHILE": TokenType.ENDWHILE,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit.

    Attributes:
        type: The TokenType classification
        spelling: The exact source text (string literals without quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    spelling: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.spelling!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Describe the token for 'expected X, got Y' messages."""
        if self.type in (TokenType.IDENT, TokenType.NUMBER):
            return f"{self.type.describe()} '{self.spelling}'"
        if self.type == TokenType.STRING:
            return f'string "{self.spelling}"'
        return self.type.describe()


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Pull-based tokenizer for Teeny source code.

    A single newline is appended to the source so the last line is always
    terminated, whether or not the file ended with one. Each call to
    next_token() consumes exactly the characters of the token it returns;
    at end of input it keeps returning EOF without moving.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()

    Attributes:
        source: The source text being tokenized (with the trailing newline)
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    DIGITS = string.digits

    # Characters that would corrupt the printf() format a string becomes
    STRING_FORBIDDEN = "%\r\n\\\t"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source + "\n"
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Yield every token up to and including EOF.

        Raises:
            LexicalError: If a malformed lexeme is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Raises:
            LexicalError: If the characters at the cursor form no token
        """
        self._skip_whitespace()
        self._skip_comment()

        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char == "":
            return self._make_token(TokenType.EOF, "", start_line, start_column)

        if char == "\n":
            self._advance()
            return self._make_token(TokenType.NEWLINE, "\n", start_line, start_column)

        if char == '"':
            return self._scan_string(start_line, start_column)

        if char in self.DIGITS:
            return self._scan_number(start_line, start_column)

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at the cursor + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume the current character, keeping line/column current."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        token_type: TokenType,
        spelling: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            spelling=spelling,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line, self._column)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs and carriage returns. Newlines are tokens."""
        while self._peek() in (" ", "\t", "\r"):
            self._advance()

    def _skip_comment(self) -> None:
        """Skip a '#' comment, leaving the terminating newline in place."""
        if self._peek() == "#":
            while not self._at_end() and self._peek() != "\n":
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a double-quoted string literal.

        The spelling excludes the quotes. There is no escape mechanism;
        any character in STRING_FORBIDDEN aborts the scan.
        """
        self._advance()  # opening "

        chars = []
        while self._peek() != '"':
            char = self._peek()
            if char in self.STRING_FORBIDDEN or char == "":
                raise InvalidStringCharacterError(
                    char or "\n",
                    self._location(),
                    self._get_current_line(),
                )
            chars.append(self._advance())

        self._advance()  # closing "
        return self._make_token(TokenType.STRING, "".join(chars), start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan digits, optionally followed by '.' and one or more digits."""
        chars = []
        while self._peek() in self.DIGITS and self._peek() != "":
            chars.append(self._advance())

        if self._peek() == ".":
            chars.append(self._advance())
            if self._peek() == "" or self._peek() not in self.DIGITS:
                raise MalformedNumberError(self._location(), self._get_current_line())
            while self._peek() in self.DIGITS and self._peek() != "":
                chars.append(self._advance())

        return self._make_token(TokenType.NUMBER, "".join(chars), start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier and resolve it against the keyword table."""
        chars = []
        while self._peek() != "" and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        return self._make_token(
            KEYWORDS.get(name, TokenType.IDENT), name, start_line, start_column
        )

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan an operator; '=', '<', '>' and '!' look one character ahead."""
        char = self._peek()

        single_tokens = {
            "+": TokenType.PLUS,
            "-": TokenType.MINUS,
            "*": TokenType.ASTERISK,
            "/": TokenType.SLASH,
        }
        if char in single_tokens:
            self._advance()
            return self._make_token(single_tokens[char], char, start_line, start_column)

        # operator -> (kind alone, kind when followed by '=')
        pairs = {
            "=": (TokenType.EQ, TokenType.EQEQ),
            "<": (TokenType.LT, TokenType.LTEQ),
            ">": (TokenType.GT, TokenType.GTEQ),
            "!": (None, TokenType.NOTEQ),
        }
        if char in pairs:
            alone, with_eq = pairs[char]
            if self._peek(1) == "=":
                self._advance()
                self._advance()
                return self._make_token(with_eq, char + "=", start_line, start_column)
            if alone is None:
                raise UnsupportedCharacterError(
                    char,
                    self._location(),
                    self._get_current_line(),
                    hint="'!' must be followed by '=' ('!=' is not-equal)",
                )
            self._advance()
            return self._make_token(alone, char, start_line, start_column)

        raise UnsupportedCharacterError(char, self._location(), self._get_current_line())
