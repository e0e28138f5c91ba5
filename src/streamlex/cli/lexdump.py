"""
lexdump - Token Listing Command-Line Interface
==============================================

This module implements the command-line driver for the streaming lexer.
It opens a source file, pulls tokens until EOF and prints one line per
token followed by a total count.

Usage Examples
--------------
Tokenize the default input file (input.txt):
    $ lexdump

Tokenize a specific file:
    $ lexdump main.src

Use a different keyword set:
    $ lexdump -k let -k fn -k return main.src

Fail the run when the scan recorded problems:
    $ lexdump --strict main.src

Output Format
-------------
    line:col   KIND             'lexeme'
       1:1     KEYWORD          'int'
       1:5     IDENTIFIER       'x'
    Total tokens: 3
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from streamlex import __version__
from streamlex.cli.errors import ExitCode, handle_cli_exception
from streamlex.config import LexerConfig
from streamlex.lexer import Tokenizer
from streamlex.tokens import Token, TokenKind

DEFAULT_INPUT = "input.txt"


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def format_token(token: Token) -> str:
    """Format one token as a listing line."""
    position = f"{token.line}:{token.column}"
    return f"{position:>8}  {token.kind.name:<15}  {token.lexeme!r}"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_INPUT,
    required=False,
)
@click.option(
    "--buffer-width",
    type=click.IntRange(min=1),
    default=None,
    help="Characters per read-ahead window (default: 4096 or $STREAMLEX_BUFFER_WIDTH)",
)
@click.option(
    "-k", "--keyword",
    "keywords",
    multiple=True,
    help="Treat WORD as a keyword (can be repeated; replaces the default set)",
)
@click.option(
    "--skip-comments",
    is_flag=True,
    help="Do not list COMMENT tokens",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with an error if the scan recorded any diagnostics",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging of buffers and tokens)",
)
@click.version_option(version=__version__, prog_name="lexdump")
def main(
    input_file: Path,
    buffer_width: Optional[int],
    keywords: tuple[str, ...],
    skip_comments: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """
    List the tokens of a source file.

    INPUT_FILE is the text file to tokenize (default: input.txt).

    \b
    Examples:
        lexdump                      # Tokenize input.txt
        lexdump main.src             # Tokenize main.src
        lexdump -k let -k fn a.src   # Custom keyword set
        lexdump --strict main.src    # Non-zero exit on diagnostics
    """
    setup_logging(verbose)

    if not input_file.exists():
        click.echo(f"Error: file not found: {input_file}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        config = LexerConfig.from_env()
        if buffer_width is not None:
            config = config.with_buffer_width(buffer_width)
        if keywords:
            config = config.with_keywords(keywords)

        with Tokenizer.open(input_file, config) as lexer:
            for token in lexer.tokenize():
                if skip_comments and token.kind is TokenKind.COMMENT:
                    continue
                click.echo(format_token(token))

            click.echo(f"Total tokens: {lexer.token_count}")
            diagnostics = lexer.diagnostics

    except Exception as e:
        handle_cli_exception(e, verbose)

    if diagnostics.has_errors():
        click.echo(diagnostics.report(), err=True)
        if strict:
            sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
