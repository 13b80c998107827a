"""
basicgo - BASIC to Go Compiler Command-Line Interface
=====================================================

This module implements the command-line interface for the compiler.

Usage Examples
--------------
Basic compilation:
    $ basicgo fib.bas

With output file:
    $ basicgo fib.bas -o fib.go

Print to stdout instead of writing a file:
    $ basicgo --stdout fib.bas

Format with gofmt and build an executable:
    $ basicgo --gofmt --build fib.bas

Show the token stream:
    $ basicgo --tokens fib.bas

Verbose mode:
    $ basicgo -v fib.bas
"""

import logging
from pathlib import Path
from typing import Optional

import click

from basicgo import __version__
from basicgo.compiler import Compiler, CompilerOptions
from basicgo.lexer import Lexer
from basicgo.toolchain import format_go_source, build_go_binary
from basicgo.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output Go file (default: input.go)",
)
@click.option(
    "--stdout", "to_stdout",
    is_flag=True,
    help="Print the Go program instead of writing a file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--gofmt",
    is_flag=True,
    help="Format the output with gofmt (requires Go)",
)
@click.option(
    "--build",
    is_flag=True,
    help="Also compile the output with go build (requires Go)",
)
@click.option(
    "--no-header",
    is_flag=True,
    help="Omit the 'Code generated' comment at the top of the output",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with a construct-by-construct trace",
)
@click.version_option(version=__version__, prog_name="basicgo")
def main(
    input_file: Path,
    output: Optional[Path],
    to_stdout: bool,
    tokens: bool,
    gofmt: bool,
    build: bool,
    no_header: bool,
    verbose: bool,
) -> None:
    """
    Compile a BASIC program to Go.

    INPUT_FILE is the BASIC source file to compile.

    \b
    Examples:
        basicgo fib.bas                # Outputs fib.go
        basicgo fib.bas -o out.go      # Specify output file
        basicgo --stdout fib.bas       # Print instead of writing
        basicgo --gofmt --build fib.bas

    \b
    Language:
        PRINT, INPUT, LET, IF/THEN/ELSE/ENDIF,
        WHILE/REPEAT/ENDWHILE, FOR/REPEAT/ENDFOR, LABEL, GOTO
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".go")

    if to_stdout and build:
        raise click.UsageError("--build needs an output file; drop --stdout")

    if not to_stdout and output.resolve() == input_file.resolve():
        raise click.BadParameter(
            "output would overwrite the input file", param_hint="--output"
        )

    try:
        source = input_file.read_text(encoding="utf-8")

        # Token dump mode
        if tokens:
            for token in Lexer(source).tokenize():
                click.echo(repr(token))
            return

        if verbose:
            click.echo(f"Compiling {input_file}...")

        options = CompilerOptions(generated_header=not no_header)
        result = Compiler(options).compile_source(source, str(input_file))

        go_source = result.go_source
        if gofmt:
            go_source = format_go_source(go_source)

        if to_stdout:
            click.echo(go_source, nl=False)
            return

        output.write_text(go_source, encoding="utf-8")

        if verbose:
            click.echo(f"Wrote {len(go_source)} bytes to {output}")
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")

        click.echo(f"Compiled {input_file} -> {output}")

        if build:
            executable = build_go_binary(output)
            click.echo(f"Built {executable}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
