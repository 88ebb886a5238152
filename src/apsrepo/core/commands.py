"""Command functionality for apsrepo."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import click

from .config import Options
from .errors import CommandError
from .outpath import expand_output_path
from .repository import SvnRunner
from .urls import build_url

logger = logging.getLogger(__name__)


class Dispatcher:
    """Prints URLs for, or runs a command against, selected repositories.

    Repositories are handled one at a time in the order given. The first
    failing command stops processing.

    Attributes:
        options (Options): Resolved invocation settings.
        runner (SvnRunner): Runs the external tool.
    """

    def __init__(self, options: Options, runner: Optional[SvnRunner] = None) -> None:
        """Initialize dispatcher."""
        self.options = options
        self.runner = runner or SvnRunner(options.executable)

    def url(self, repo: str) -> str:
        """Build the URL of a repository from the current options."""
        options = self.options
        return build_url(options.base_url, options.url_root, repo, options.rel_path)

    def output_path(self, repo: str) -> str:
        """Expand the output template for a repository, or return ''."""
        if not self.options.out_template:
            return ""
        return expand_output_path(self.options.out_template, repo, self.options.rel_path)

    def list_urls(self, repos: Iterable[str]) -> None:
        """Print the URL of each repository."""
        for repo in repos:
            click.echo(self.url(repo))

    def process(self, repos: Iterable[str]) -> int:
        """Run the passthrough command against each repository.

        In dry-run mode the command lines are only logged; no directory is
        created and nothing is executed.

        Returns:
            int: Number of repositories processed.

        Raises:
            CommandError: On the first failing command.
        """
        count = 0
        for repo in repos:
            url = self.url(repo)
            out = self.output_path(repo)
            logger.info("| %s", " ".join(self.runner.command_line(self.options.command, url, out)))

            if not self.options.dry_run:
                try:
                    output = self.runner.run(self.options.command, url, out)
                except CommandError as e:
                    if e.stdout:
                        click.echo(e.stdout, nl=False)
                    raise
                if output:
                    click.echo(output, nl=False)
            count += 1
        return count
