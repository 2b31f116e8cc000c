"""zdoc CLI - search Zig sources for public declarations."""

import sys

import click

from .config import load_settings
from .errors import ZdocError
from .logging import configure_logging, get_logger
from .render import DocWriter
from .search import Query
from .tools.search_docs import run_search

USAGE = """\
usage: {prog} [-s] [-d] [source] <identifier>

the program searches source code for matching public identifiers,
printing found types and their doc comments to stdout.
the search is case-insensitive and non-exhaustive.
if -s option is specified, any identifier substring matches.
without an identifier, all public declarations are listed after the
file doc comment; with -d, only the file doc comment is printed.

for example, look up "hello" identifier in a project file:

    {prog} ./src/main.zig hello

search across all .zig files starting from the src directory,
recursively and following symlinks:

    {prog} ./src hello

if the source starts with "std.", the dot delimiters are replaced
with filesystem path separator and "std." with the "std_dir" value
from "zig env" command output.

for example, look up format function in std lib:

    {prog} std.fmt format

list all expectXxx functions from the testing module:

    {prog} -s std.testing expect

as a special case, if the source is exactly "std" and no such file
or directory exists, {prog} searches across the whole zig std lib.
"""

PROG = "zdoc"


def fatal(message: str) -> None:
    """Print a one-line diagnostic to stderr and exit with status 1."""
    click.echo(message.rstrip("\n"), err=True)
    raise SystemExit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version="0.3.0", prog_name=PROG)
@click.option("-s", "substring", is_flag=True, help="Match any identifier containing the query.")
@click.option("-d", "--doc-only", is_flag=True, help="Print file doc comments only.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.argument("args", nargs=-1)
def cli(substring: bool, doc_only: bool, verbose: bool, args: tuple[str, ...]) -> None:
    """Search Zig source code for public identifiers."""
    try:
        settings = load_settings()
    except ZdocError as e:
        fatal(str(e))
    configure_logging(level="DEBUG" if verbose else settings.log_level)
    logger = get_logger(__name__)

    if not args:
        click.echo(USAGE.format(prog=PROG), err=True, nl=False)
        return
    if len(args) > 2:
        fatal("too many args")

    source = args[0]
    identifier = args[1] if len(args) == 2 else None
    query = Query.from_args(identifier, substring, doc_only, settings.browse_mode)
    logger.debug("search_started", source=source, query=str(query))

    writer = DocWriter(sys.stdout)
    try:
        run_search(source, query, writer, settings)
    except ZdocError as e:
        logger.debug("search_failed", error=e.error_name, details=e.details)
        fatal(str(e))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
