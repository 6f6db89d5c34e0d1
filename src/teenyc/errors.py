"""
Teeny Compiler Error Hierarchy
==============================

This module defines the exception hierarchy for the Teeny compiler.
All exceptions inherit from TeenyError, allowing callers to catch every
compiler failure with a single except clause if desired.

Exception Hierarchy
-------------------
TeenyError (base)
├── LexicalError - malformed lexemes
│   ├── UnsupportedCharacterError - character that starts no token
│   ├── InvalidStringCharacterError - forbidden character inside "..."
│   └── MalformedNumberError - decimal point without a following digit
├── TeenySyntaxError - token does not fit the grammar
│   └── UnexpectedTokenError - "expected X, got Y"
├── SemanticError - well-formed but meaningless programs
│   ├── UndeclaredVariableError - variable used before LET/INPUT
│   ├── DuplicateLabelError - LABEL declared twice
│   ├── UndefinedLabelError - GOTO target never declared
│   └── ReservedNameError - name the generated C cannot use
└── OutputError - generated C could not be written

Compilation stops at the first error. There is no recovery and no
multi-error report: exactly one of these reaches the caller.

Error Message Format
--------------------
    average.teeny:4:11: error: undeclared variable 'nums'
        LET a = nums + 1
                ^
    hint: did you mean 'num'?
"""

import difflib
from dataclasses import dataclass
from typing import Iterable, List, Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in Teeny source code, used for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception
# =============================================================================

class TeenyError(Exception):
    """
    Base exception for all Teeny compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The source text of the offending line
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the message with location, source context and hint."""
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(TeenyError):
    """
    A sequence of characters that cannot form a token.

    Examples:
        - '!' not followed by '='
        - '9.' with no digit after the decimal point
        - '%' inside a string literal
        - '$' anywhere outside a comment
    """
    pass


class UnsupportedCharacterError(LexicalError):
    """Character that does not start any Teeny token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unsupported character {char!r}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidStringCharacterError(LexicalError):
    """
    Forbidden character inside a string literal.

    String literals are copied verbatim into a printf() format, so
    format directives, escapes and line breaks are rejected. A string
    that is never closed fails here as well, on the line break.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        if char == "\n":
            hint = "string literals must be closed with '\"' on the same line"
        else:
            hint = "strings may not contain '%', '\\', tabs or line breaks"
        super().__init__(
            f"unsupported character in string: {char!r}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MalformedNumberError(LexicalError):
    """Numeric literal with a decimal point but no fractional digits."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "numbers must have at least one digit after the decimal point",
            location=location,
            hint="write '9.0' instead of '9.'",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class TeenySyntaxError(TeenyError):
    """
    Token stream that does not match the Teeny grammar.

    Named to avoid shadowing the builtin SyntaxError.
    """
    pass


class UnexpectedTokenError(TeenySyntaxError):
    """The parser required one kind of token and found another."""

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, got {found}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class SemanticError(TeenyError):
    """
    Program that parses but refers to names that do not exist, or
    declares a name twice.
    """
    pass


class UndeclaredVariableError(SemanticError):
    """
    Reference to a variable before any LET or INPUT introduced it.

    Similar names already in the symbol set are offered as hints.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        known_names: Iterable[str] = (),
    ):
        self.name = name
        self.similar_names = suggest_similar(name, known_names)

        hint = None
        if self.similar_names:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_names)
            hint = f"did you mean {suggestions}?"
        else:
            hint = f"assign it first with 'LET {name} = ...' or 'INPUT {name}'"

        super().__init__(
            f"undeclared variable '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateLabelError(SemanticError):
    """LABEL statement reusing a name that is already declared."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndefinedLabelError(SemanticError):
    """
    GOTO whose target is never declared anywhere in the program.

    Raised only once the whole program has been parsed, because a label
    may legally be declared after the GOTO that refers to it.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"GOTO target '{name}' is never declared",
            location=location,
            hint=f"add 'LABEL {name}' somewhere in the program",
            source_line=source_line,
        )


class ReservedNameError(SemanticError):
    """
    Variable or label whose name the generated C cannot use.

    Teeny names are copied into C unchanged, so C keywords, <stdio.h>
    macros and the names main() already relies on are off limits.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"'{name}' is reserved in the generated C program",
            location=location,
            hint=f"rename '{name}', for example to '{name}1'",
            source_line=source_line,
        )


# =============================================================================
# Output Errors
# =============================================================================

class OutputError(TeenyError):
    """
    Translated program could not be persisted.

    The translation itself succeeded; only writing the destination
    failed. The CLI reports this separately from compile errors.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write output file '{path}': {reason}")


# =============================================================================
# Helpers
# =============================================================================

def suggest_similar(name: str, candidates: Iterable[str], limit: int = 3) -> List[str]:
    """Return up to `limit` names from `candidates` that look like `name`."""
    return difflib.get_close_matches(name, sorted(candidates), n=limit, cutoff=0.6)
