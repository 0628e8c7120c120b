"""
stkasm - Stack Machine Assembler Front End CLI
==============================================

Command-line interface for the stack machine assembler front end. It
parses a source file, reports every diagnostic, and can print the
resulting intermediate representation as a listing.

Usage Examples
--------------
Check a program:
    $ stkasm program.asm

Print the listing:
    $ stkasm program.asm --listing

Accept upper-case mnemonics and require a final line terminator:
    $ stkasm -i --eof-policy report program.asm

Verbose mode:
    $ stkasm -v program.asm
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional
import logging
import sys

import click

from stackasm import __version__
from stackasm.cli.errors import ExitCode, handle_cli_exception
from stackasm.config import EofPolicy, FrontEndConfig
from stackasm.frontend import FrontEnd


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--listing",
    is_flag=True,
    help="Print the intermediate representation as a listing",
)
@click.option(
    "-i", "--ignore-case",
    is_flag=True,
    help="Match mnemonics case-insensitively (default: exact match, "
         "or STACKASM_CASE_SENSITIVE)",
)
@click.option(
    "--eof-policy",
    type=click.Choice([p.value for p in EofPolicy], case_sensitive=False),
    default=None,
    help="Handling of a last line without terminator: finish it "
         "(implicit-eol, default) or report an error (report)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="stkasm")
def main(
    input_file: Path,
    listing: bool,
    ignore_case: bool,
    eof_policy: Optional[str],
    verbose: bool,
) -> None:
    """
    Parse stack machine assembly source and report errors.

    INPUT_FILE is the assembly source file to parse.

    \b
    Examples:
        stkasm program.asm            # Report errors only
        stkasm program.asm -l         # Also print the listing
        stkasm -i program.asm         # Case-insensitive mnemonics
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = FrontEndConfig.from_env()
        if ignore_case:
            config = replace(config, case_sensitive=False)
        if eof_policy is not None:
            config = replace(config, eof_policy=EofPolicy(eof_policy.lower()))

        if verbose:
            click.echo(f"Parsing {input_file}...")

        front = FrontEnd(config)
        ir = front.parse_file(input_file)

        if listing:
            click.echo(ir.format_listing())

        if front.has_errors():
            click.echo(front.get_error_report(), err=True)
            sys.exit(ExitCode.SOURCE_ERRORS)

        if verbose:
            click.echo(f"{len(ir)} lines, no errors")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
