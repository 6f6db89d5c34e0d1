"""
C Source Emitter
================

Append-only sink for generated C text. The parser writes into two
independent buffers while it recognizes the program:

    header  - #include, the opening of main() and one 'float' per variable
    body    - statement translations in source order, then the epilogue

Declarations can be discovered anywhere in the program, but C needs them
before use, so they go to the header no matter where in the body the
first use falls. The final text is always header followed by body.

Nothing is written to disk until finalize(); if parsing fails the
buffers are simply dropped.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from teenyc.errors import OutputError

logger = logging.getLogger(__name__)


class Emitter:
    """
    Two-buffer text accumulator for the generated program.

    Example:
        emitter = Emitter("hello.c")
        emitter.declare("#include <stdio.h>")
        emitter.write("printf(")
        emitter.write_line('"hi\\n");')
        emitter.finalize()

    Attributes:
        output_path: Destination used by finalize(), or None for in-memory use
    """

    def __init__(self, output_path: Optional[Union[str, Path]] = None):
        self.output_path = Path(output_path) if output_path is not None else None
        self._header: list[str] = []
        self._body: list[str] = []

    def declare(self, fragment: str) -> None:
        """Append a line to the header buffer."""
        self._header.append(fragment)
        self._header.append("\n")

    def write(self, fragment: str) -> None:
        """Append text to the body buffer; the caller controls line breaks."""
        self._body.append(fragment)

    def write_line(self, fragment: str) -> None:
        """Append a line to the body buffer."""
        self._body.append(fragment)
        self._body.append("\n")

    @property
    def header(self) -> str:
        return "".join(self._header)

    @property
    def body(self) -> str:
        return "".join(self._body)

    def output(self) -> str:
        """Return the complete program text: header, then body."""
        return self.header + self.body

    def finalize(self) -> str:
        """
        Write header and body to output_path.

        Returns:
            The text that was written

        Raises:
            OutputError: If no destination is configured, or it cannot be
                created or written
        """
        if self.output_path is None:
            raise OutputError("<none>", "no output path configured")

        text = self.output()
        try:
            self.output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputError(str(self.output_path), e.strerror or str(e)) from e

        logger.debug(f"Wrote {len(text)} bytes to {self.output_path}")
        return text
