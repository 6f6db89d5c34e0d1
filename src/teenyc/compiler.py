"""
Teeny Compiler Main Module
==========================

This module provides the main compiler interface for Teeny. It wires
the three stages together for one compilation:

    Source → Lexer ⇄ Parser → Emitter → C source

The lexer and parser run interleaved (the parser pulls tokens as it
needs them) and the parser writes C straight into the emitter, so a
compilation is one uninterrupted pass.

Usage
-----
Command line:
    $ ttc hello.teeny -o hello.c

Programmatic:
    >>> from teenyc import compile_teeny
    >>> c_source = compile_teeny('PRINT "hello, world"')

The output is a complete C99 program; build it with any C compiler:
    $ gcc -std=c99 -o hello hello.c

Error Handling
--------------
Compilation stops at the first error. Lexical, syntax and semantic
errors propagate as TeenyError subclasses; nothing is written to the
output path unless the whole program translated successfully.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from teenyc.emitter import Emitter
from teenyc.lexer import Lexer
from teenyc.parser import (
    Parser,
    ParseContext,
    DEFAULT_FLOAT_FORMAT,
    DEFAULT_MAX_NESTING_DEPTH,
)

logger = logging.getLogger(__name__)

# A single printf float conversion: flags, width, precision, then 'f'
_FLOAT_FORMAT_RE = re.compile(r"%[-+ #0]*\d*(\.\d+)?f")


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        output_path: Where write_output() and compile_file() persist the
                     generated C. None keeps the result in memory only.
        max_nesting_depth: Deepest allowed IF/WHILE nesting.
        float_format: printf conversion used by PRINT of an expression.
                      Must be a single float conversion such as "%.2f".
    """
    output_path: Optional[Path] = None
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    float_format: str = DEFAULT_FLOAT_FORMAT

    def __post_init__(self):
        if self.output_path is not None:
            self.output_path = Path(self.output_path)
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}"
            )
        if not _FLOAT_FORMAT_RE.fullmatch(self.float_format):
            raise ValueError(
                f"float_format must be a single printf float conversion "
                f"such as '%.2f', got {self.float_format!r}"
            )


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        success: True once the whole program translated
        c_source: Generated C program text
        variables: Variables in declaration order
        labels: Declared labels in source order
        token_count: Number of tokens consumed by the parser
    """
    filename: str = ""
    success: bool = False
    c_source: str = ""
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    token_count: int = 0


class _CountingLexer(Lexer):
    """Lexer that counts the tokens it hands out."""

    def __init__(self, source: str, filename: str = "<input>"):
        super().__init__(source, filename)
        self.token_count = 0

    def next_token(self):
        token = super().next_token()
        self.token_count += 1
        return token


class TeenyCompiler:
    """
    Teeny to C compiler.

    Each call to compile_source() builds a fresh lexer, parse context and
    emitter, so one compiler instance can be reused for any number of
    independent compilations.

    Example:
        compiler = TeenyCompiler()
        result = compiler.compile_file("hello.teeny")
        print(result.c_source)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self._emitter: Optional[Emitter] = None

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile Teeny source code to C.

        Args:
            source: Teeny source text
            filename: Source filename for error messages

        Returns:
            CompilerResult with the generated program

        Raises:
            TeenyError: If the program is malformed
        """
        logger.debug(f"Compiling {filename} ({len(source)} characters)")

        lexer = _CountingLexer(source, filename)
        emitter = Emitter(self.options.output_path)
        context = ParseContext()
        parser = Parser(
            lexer,
            emitter,
            context,
            max_nesting_depth=self.options.max_nesting_depth,
            float_format=self.options.float_format,
        )
        parser.parse()

        self._emitter = emitter
        result = CompilerResult(
            filename=filename,
            success=True,
            c_source=emitter.output(),
            variables=list(context.variables),
            labels=list(context.declared_labels),
            token_count=lexer.token_count,
        )

        logger.debug(
            f"Parsed {result.token_count} tokens: "
            f"{len(result.variables)} variables, {len(result.labels)} labels"
        )
        return result

    def compile_file(self, filepath: Union[str, Path]) -> CompilerResult:
        """
        Compile a Teeny source file to C.

        Args:
            filepath: Path to the .teeny source file

        Returns:
            CompilerResult with the generated program

        Raises:
            TeenyError: If the program is malformed
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def write_output(self, output_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Persist the most recent compilation.

        Args:
            output_path: Destination; defaults to options.output_path

        Returns:
            The path that was written

        Raises:
            OutputError: If the destination cannot be written
            RuntimeError: If nothing has been compiled yet
        """
        if self._emitter is None:
            raise RuntimeError("write_output() called before a successful compilation")

        if output_path is not None:
            self._emitter.output_path = Path(output_path)
        self._emitter.finalize()
        return self._emitter.output_path


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_teeny(source: str, filename: str = "<input>") -> str:
    """
    Compile Teeny source code to C.

    Example:
        >>> c_source = compile_teeny('LET x = 1\\nPRINT x')
        >>> "float x;" in c_source
        True
    """
    compiler = TeenyCompiler()
    return compiler.compile_source(source, filename).c_source


def compile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
) -> str:
    """
    Compile a Teeny source file, optionally writing the C to output_path.

    Raises:
        TeenyError: If compilation fails
        OutputError: If output_path cannot be written
        FileNotFoundError: If the source file does not exist
    """
    compiler = TeenyCompiler(CompilerOptions(output_path=output_path))
    result = compiler.compile_file(filepath)

    if output_path is not None:
        compiler.write_output()

    return result.c_source
