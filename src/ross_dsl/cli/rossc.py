"""
rossc - Rule Language Compiler Command-Line Interface
=====================================================

Compiles a rule-language program and prints the resulting configuration.

Usage Examples
--------------
Print the compiled configuration:
    $ rossc rules.ross

Write it to a file:
    $ rossc rules.ross -o rules.txt

Verbose mode (debug logging of every statement):
    $ rossc -v rules.ross

Exit Codes
----------
0 on success, 1 if the program does not compile, 2 for bad arguments,
3 for internal errors.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ross_dsl import __version__
from ross_dsl.cli.errors import handle_cli_exception
from ross_dsl.compiler import CompilerOptions, RossCompiler
from ross_dsl.errors import DEFAULT_MAX_LOCATION_LENGTH


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
    help="Write the configuration to this file instead of stdout",
)
@click.option(
    "-w", "--width",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_LOCATION_LENGTH,
    show_default=True,
    help="Width of source excerpts in error messages",
)
@click.option(
    "--allow-redeclaration",
    is_flag=True,
    help="Let later declarations replace earlier ones",
)
@click.option(
    "--no-event-codes",
    is_flag=True,
    help="Do not predefine the protocol *_EVENT_CODE constants",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="rossc")
def main(
    input_file: Path,
    output: Optional[Path],
    width: int,
    allow_redeclaration: bool,
    no_event_codes: bool,
    verbose: bool,
) -> None:
    """
    Compile a rule-language program.

    INPUT_FILE is the program source.

    \b
    Examples:
        rossc rules.ross                # Print the configuration
        rossc rules.ross -o rules.txt   # Write it to a file
        rossc -v rules.ross             # Log every statement
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    options = CompilerOptions(
        filename=str(input_file),
        max_location_length=width,
        predefined_constants=not no_event_codes,
        allow_redeclaration=allow_redeclaration,
    )

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")

        result = RossCompiler(options).compile_file(str(input_file))
        text = result.config.describe()

        if output is None:
            click.echo(text)
        else:
            output.write_text(text + "\n", encoding="utf-8")
            click.echo(f"Compiled {input_file} -> {output}")

        if verbose:
            click.echo(f"Statements: {result.statement_count}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, max_location_length=width)


if __name__ == "__main__":
    main()
