"""
teenyc - Teeny to C Compiler
============================

This package translates Teeny, a tiny structured BASIC, into C source
that any C99 compiler can build.

A Teeny program has one numeric type (C 'float'), implicitly declared
variables, IF/WHILE blocks, labels and GOTO:

    # Print the first ten Fibonacci numbers
    LET a = 0
    LET b = 1
    LET n = 0
    WHILE n < 10 REPEAT
        PRINT a
        LET c = a + b
        LET a = b
        LET b = c
        LET n = n + 1
    ENDWHILE

Pipeline
--------
    Teeny Source → Lexer ⇄ Parser → Emitter → C Source

Translation is single-pass and syntax-directed: the parser writes C as
it recognizes each rule, without building a syntax tree.

Usage
-----
>>> from teenyc import compile_teeny
>>> print(compile_teeny('PRINT "hello, world"'))
#include <stdio.h>
int main(int argc, char *argv[]) {
printf("hello, world\\n");
return 0;
}
<BLANKLINE>

Or from the command line:
    $ ttc hello.teeny -o hello.c
    $ gcc -std=c99 -o hello hello.c
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Imports
# =============================================================================

from teenyc.compiler import (
    TeenyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
)
from teenyc.emitter import Emitter
from teenyc.errors import (
    SourceLocation,
    TeenyError,
    LexicalError,
    UnsupportedCharacterError,
    InvalidStringCharacterError,
    MalformedNumberError,
    TeenySyntaxError,
    UnexpectedTokenError,
    SemanticError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndefinedLabelError,
    ReservedNameError,
    OutputError,
)
from teenyc.lexer import Lexer, Token, TokenType, KEYWORDS
from teenyc.parser import Parser, ParseContext

__all__ = [
    # Version
    "__version__",
    # Main API
    "TeenyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    # Stages
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Parser",
    "ParseContext",
    "Emitter",
    # Errors
    "SourceLocation",
    "TeenyError",
    "LexicalError",
    "UnsupportedCharacterError",
    "InvalidStringCharacterError",
    "MalformedNumberError",
    "TeenySyntaxError",
    "UnexpectedTokenError",
    "SemanticError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndefinedLabelError",
    "ReservedNameError",
    "OutputError",
]
