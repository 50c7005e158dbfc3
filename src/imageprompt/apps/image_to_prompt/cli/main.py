"""Command line interface for the image-to-prompt tool."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from imageprompt.errors import FlagError, ImagePromptError
from imageprompt.libs.vision.grid import load_image
from imageprompt.logging_utils import configure_logging

from .. import __version__
from ..core.config import load_config
from ..core.encoder import encode_prompt

LOG_NAME = "imageprompt"

app = typer.Typer(
    help="Describe an image pixel by pixel as a run-length encoded prompt.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"image-to-prompt version {__version__}")
        raise typer.Exit()


@app.command()
def run(
    image_file: Path = typer.Argument(
        ..., metavar="IMAGE_FILE", help="Image to describe; format is detected from content."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Verbosity of logging output (debug, info, warn, error). [default: warn]"
    ),
    log_as_json: Optional[bool] = typer.Option(
        None, "--log-as-json/--no-log-as-json", help="Change logging format to JSON."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Load IMAGE_FILE and print a prompt describing it pixel by pixel."""

    try:
        config = load_config(
            image_path=image_file, log_level=log_level, log_as_json=log_as_json
        )
    except FlagError as exc:
        if log_level is not None:
            raise typer.BadParameter(str(exc), param_hint="'--log-level'") from exc
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    log = configure_logging(LOG_NAME, level=config.level, as_json=config.log_as_json)
    log.debug(
        "image_to_prompt_config",
        extra={
            "image_path": str(config.image_path),
            "log_level": config.log_level,
            "log_as_json": config.log_as_json,
        },
    )

    try:
        grid = load_image(config.image_path, log=log)
        prompt = encode_prompt(grid, log=log)
    except ImagePromptError as exc:
        log.error(
            "Failed to execute command: %s",
            exc,
            extra={"error_type": exc.err_type},
        )
        raise typer.Exit(code=1) from exc

    typer.echo(prompt, nl=False)


if __name__ == "__main__":
    app()
