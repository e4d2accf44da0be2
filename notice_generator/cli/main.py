"""Command line interface for notice-file-generator."""

import sys
from typing import Optional

import click

from .. import __version__
from ..config import DEFAULT_MAX_WORKERS, load_config
from ..console import print_summary
from ..exceptions import NoticeError
from ..generator import NoticeGenerator
from ..logging_config import logger, setup_logging

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-p",
    "--path",
    "repository_path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    default=".",
    show_default=True,
    help="Repository to generate the NOTICE.txt for.",
)
@click.option(
    "-t",
    "--token",
    envvar="GITHUB_TOKEN",
    default=None,
    help="GitHub API token. Without it the GitHub API allows 60 requests per hour. [env: GITHUB_TOKEN]",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    envvar="NOTICE_CONFIG",
    required=True,
    type=click.Path(dir_okay=False),
    help="YAML configuration file (title, copyright, description, search). [env: NOTICE_CONFIG]",
)
@click.option(
    "--max-workers",
    envvar="NOTICE_MAX_WORKERS",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="Maximum number of dependencies resolved concurrently. [env: NOTICE_MAX_WORKERS]",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging verbosity.",
)
@click.version_option(version=__version__, prog_name="notice-generator")
def cli(
    repository_path: str,
    token: Optional[str],
    config_file: str,
    max_workers: int,
    log_level: str,
) -> None:
    """Generate a NOTICE.txt listing the third-party dependencies of a repository.

    Dependencies are read from the manifests listed in the configuration
    file. Entries of an existing NOTICE.txt are reused as-is, so manual edits
    to them are kept.
    """
    setup_logging(level=log_level)

    try:
        config = load_config(config_file, repository_path=repository_path, github_token=token, max_workers=max_workers)
        with NoticeGenerator(config) as generator:
            result = generator.run()
    except NoticeError as e:
        logger.error(str(e))
        sys.exit(1)

    print_summary(result)


def main() -> None:
    """Main entry point for the notice generator."""
    cli()


if __name__ == "__main__":
    main()
