"""Command line interface for apsrepo."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import click

from . import __version__
from .core.arguments import DELIMITER, PartitionedArgs, partition_args
from .core.catalog import Catalog
from .core.commands import Dispatcher
from .core.config import Config, Options, repo_file_path
from .core.errors import ApsRepoError, NoMatchError
from .core.logging import setup_logging
from .core.matcher import Matcher
from .core.urls import normalize_base, normalize_rel_path, url_root

logger = logging.getLogger("apsrepo.cli")

EPILOG = """\b
NOTES
  Option flags must precede all filter expressions. The arguments following
  the end-of-options delimiter '--' form an svn subcommand, and svn
  subcommands usually take a path as their trailing argument. With '-p' that
  path has to be written near the front of the command line:

\b
    apsrepo -p branches/b ^foo -- ls -v     # svn ls -v <REPO>/branches/b

\b
  Instead, anywhere after '--' you may give the path prefixed with a single
  '+'. This keeps the path at the end of the command line for convenient
  repeated editing:

\b
    apsrepo ^foo -- ls -v +branches/b

\b
  Output path (-o) variables: @=repository, ^=relative path,
  %=repository/relative path. Prefix a variable with '\\' to keep it literal.
"""


class DelimitedCommand(click.Command):
    """Command that keeps ``--`` among its positional tokens.

    Option parsing stops at the first positional token, so a later ``--``
    is passed through untouched. A ``--`` directly after the options is
    consumed by the parser instead; it is put back here.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        raw = list(args)
        rest = super().parse_args(ctx, args)
        tokens: Tuple[str, ...] = tuple(ctx.params.get("tokens") or ())
        option_values = [v for k, v in ctx.params.items() if k != "tokens" and v == DELIMITER]
        if raw.count(DELIMITER) > tokens.count(DELIMITER) + len(option_values):
            ctx.params["tokens"] = (DELIMITER, *tokens)
        return rest


@click.command(
    cls=DelimitedCommand,
    epilog=EPILOG,
    context_settings={"allow_interspersed_args": False, "help_option_names": ["-h", "--help"]},
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "-a", "match_any", is_flag=True, help="Select repositories matching any given expression"
)
@click.option("-c", "case_sensitive", is_flag=True, help="Use case-sensitive matching")
@click.option(
    "-d",
    "dry_run",
    is_flag=True,
    help="Do nothing but print commands which would be executed (dry-run)",
)
@click.option(
    "-f",
    "repo_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Use repository definitions from FILE",
    metavar="FILE",
)
@click.option(
    "-o",
    "out_path",
    default="",
    metavar="PATH",
    help="Command output PATH (variables: @=repo, ^=relpath, %=repo/relpath)",
)
@click.option(
    "-p",
    "rel_path",
    default="",
    metavar="PATH",
    help="Append PATH to all constructed URLs (see NOTES for alternative)",
)
@click.option(
    "-q", "quiet", is_flag=True, help="Suppress all non-essential and error messages (quiet)"
)
@click.option("-s", "server", metavar="SERVER", help="Prepend SERVER to all constructed URLs")
@click.option(
    "-w", "web", is_flag=True, help="Construct Web URLs instead of repository URLs"
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read settings from a YAML configuration FILE (default: ~/.apsrepo.yaml)",
    metavar="FILE",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", metavar="FILE", help="Also write log messages to FILE")
@click.version_option(__version__, prog_name="apsrepo")
def cli(
    tokens: Tuple[str, ...],
    match_any: bool,
    case_sensitive: bool,
    dry_run: bool,
    repo_file: Optional[Path],
    out_path: str,
    rel_path: str,
    quiet: bool,
    server: Optional[str],
    web: bool,
    config_file: Optional[Path],
    debug: bool,
    log_file: Optional[str],
) -> None:
    """Select repositories by regular expression and run svn against them.

    Without filter expressions the URL of every known repository is printed.
    With filter expressions only the matching repositories are printed, or,
    when an svn subcommand follows '--', the subcommand is run against each
    of them with the repository URL (and output path, if any) appended.

    Examples:

      # Print the URLs of all repositories whose name contains "foo"
      apsrepo foo

      # List the trunk of every repository starting with "lib"
      apsrepo ^lib -- ls +trunk

      # Check out matching repositories into out/<repo>/trunk
      apsrepo -o out/@/^ ^lib -- co -q +trunk

      # Show what would be run, without running it
      apsrepo -d ^lib -- co +trunk
    """
    setup_logging(debug=debug, quiet=quiet, log_file=log_file)

    try:
        config = Config(config_file)
        args = partition_args(tokens)
        if args.path is not None:
            rel_path = args.path

        options = Options(
            base_url=normalize_base(server if server is not None else config.server),
            url_root=url_root(web, config.svn_root, config.web_root),
            repo_file=repo_file if repo_file is not None else repo_file_path(config.repo_file),
            rel_path=normalize_rel_path(rel_path),
            out_template=out_path,
            executable=config.executable,
            match_any=match_any,
            case_sensitive=case_sensitive,
            dry_run=dry_run,
            command=args.command,
        )
        logger.debug("Options: %s", options)

        catalog = Catalog.load(options.repo_file)
        run(options, catalog, args)
    except ApsRepoError as e:
        logger.error("error: %s", e)
        if quiet:
            click.get_current_context().exit(1)
        raise click.Abort()


def run(options: Options, catalog: Catalog, args: PartitionedArgs) -> None:
    """Select repositories and print their URLs or dispatch the command."""
    dispatcher = Dispatcher(options)

    def handle(repos: Iterable[str]) -> None:
        if args.has_command:
            dispatcher.process(repos)
        else:
            dispatcher.list_urls(repos)

    if not args.filters:
        if args.has_command:
            logger.warning(
                "no filter expressions given, listing repositories without running: %s",
                " ".join(args.command),
            )
        dispatcher.list_urls(catalog)
        return

    matcher = Matcher(catalog, case_sensitive=options.case_sensitive)
    if options.match_any:
        for _, matches in matcher.iter_any(args.filters):
            handle(matches)
        return

    matches = matcher.match_all(args.filters)
    if not matches:
        raise NoMatchError(args.filters)
    handle(matches)
