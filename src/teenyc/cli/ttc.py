"""
ttc - Teeny Compiler Command-Line Interface
===========================================

This module implements the command-line interface for the Teeny
compiler. It reads one source file, translates it to C and writes the
result next to it (or wherever -o says).

Usage Examples
--------------
Basic compilation:
    $ ttc hello.teeny

With output file:
    $ ttc hello.teeny -o hello.c

Full pipeline to an executable:
    $ ttc hello.teeny -o hello.c && gcc -std=c99 -o hello hello.c

Token dump (debugging):
    $ ttc --tokens hello.teeny
"""

import logging
from pathlib import Path
from typing import Optional

import click

from teenyc import __version__
from teenyc.cli.errors import handle_cli_exception
from teenyc.compiler import TeenyCompiler, CompilerOptions
from teenyc.lexer import Lexer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "source_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: source file with .c suffix)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ttc")
def main(
    source_file: Path,
    output: Optional[Path],
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Compile a Teeny program to C.

    SOURCE_FILE is the Teeny source file (.teeny) to compile.

    \b
    Examples:
        ttc hello.teeny              # Outputs hello.c
        ttc hello.teeny -o out.c     # Specify output file
        ttc --tokens hello.teeny     # Dump tokens
        ttc -v hello.teeny           # Verbose output

    \b
    Language summary:
        LET x = expr        INPUT x         PRINT expr | "text"
        IF cmp THEN ... ENDIF
        WHILE cmp REPEAT ... ENDWHILE
        LABEL name          GOTO name
    """
    setup_logging(verbose)

    if output is None:
        output = source_file.with_suffix(".c")
    logger.debug(f"Translating {source_file} -> {output}")

    # Read the source before touching the compiler
    try:
        source = source_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        handle_cli_exception(e, verbose)

    try:
        if tokens:
            for token in Lexer(source, str(source_file)).tokenize():
                click.echo(repr(token))
            return

        if verbose:
            click.echo(f"Compiling {source_file}...")

        compiler = TeenyCompiler(CompilerOptions(output_path=output))
        result = compiler.compile_source(source, str(source_file))
        compiler.write_output()

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")
            click.echo(f"Wrote {len(result.c_source)} bytes to {output}")

        click.echo(f"Compiled {source_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
