"""
teenyc Command-Line Interface
=============================

- **ttc**: Teeny to C compiler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["ttc"]
