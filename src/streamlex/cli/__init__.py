"""
streamlex Command-Line Interface
================================

This package provides the command-line driver for the lexer:

- **lexdump**: tokenize a file and list every token with its position

The tool is a Click application; see `lexdump --help`.
"""

__all__ = ["lexdump"]
