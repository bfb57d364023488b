"""CLI entry point for lineshell. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from lineshell.config import Config
from lineshell.errors import LineshellError
from lineshell.loop import RunLoop
from lineshell.readline import Readline, plain_theme
from lineshell.runner import ProcessRunner
from lineshell.suggestions import SuggestionIndex, list_entries
from lineshell.terminal import ProcessTerminal

logger = logging.getLogger(__name__)


def _configure_logging(config: Config) -> None:
    # stdout and stderr belong to the raw-mode terminal, so logs only ever go to a file.
    if config.log_file is None:
        logging.getLogger("lineshell").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=config.log_file,
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run_shell(config: Config) -> None:
    """Scan the directory, then run the editor until interrupted."""
    index = SuggestionIndex(list_entries(config.directory))
    editor = Readline(index, prompt=config.prompt, theme=config.theme)
    loop = RunLoop(
        editor,
        ProcessTerminal(),
        ProcessRunner(cwd=config.directory),
        error_style=config.theme.error,
        strict_output=config.strict_output,
    )
    loop.run()


@click.command()
@click.option(
    "--directory",
    "-C",
    default=".",
    type=click.Path(file_okay=False),
    help="Directory to draw suggestions from and run commands in.",
)
@click.option("--prompt", default=">", help="Prompt marker shown before the input.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option(
    "--strict-output",
    is_flag=True,
    help="Abort when a command prints output that is not valid UTF-8.",
)
@click.option("--log-file", default=None, help="Write log records to this file.")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
)
def main(directory, prompt, no_color, strict_output, log_file, log_level):
    """Interactive command line with inline suggestions from DIRECTORY."""
    config = Config(
        directory=directory,
        prompt=prompt,
        strict_output=strict_output,
        log_file=log_file,
        log_level=log_level,
    )
    if no_color:
        config.theme = plain_theme()

    _configure_logging(config)

    try:
        run_shell(config)
    except LineshellError as e:
        logger.error("Fatal: %s", e)
        click.echo(f"lineshell: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
