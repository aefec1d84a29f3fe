"""Main CLI application."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import RenderError, ValuesError
from ..core.models import MissingKeyPolicy, RendererConfig
from ..rendering.engine import Renderer
from ..settings import Settings
from ..values.loader import build_values
from .parsers import resolve_missing_key, validate_overrides

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tplrender",
    help="Render Jinja2 template trees against YAML/JSON values.",
)


@app.command()
def render(
    inputs: Annotated[
        list[str],
        typer.Argument(
            help="Template files or directories, rendered in the order given.",
            metavar="INPUT...",
        ),
    ],
    output: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            "-o",
            help="'-' for stdout, DIR/ to mirror inputs below DIR, or a single file.",
            metavar="TARGET",
        ),
    ] = None,
    value_files: Annotated[
        Optional[list[str]],
        typer.Option(
            "--values",
            "-f",
            help="YAML or JSON values file. Repeatable; later files win.",
            metavar="FILE",
        ),
    ] = None,
    overrides: Annotated[
        Optional[list[str]],
        typer.Option(
            "--set",
            "-s",
            help="Override a value (dots select nested keys). Repeatable; later wins.",
            metavar="KEY=VALUE",
            callback=validate_overrides,
        ),
    ] = None,
    preloads: Annotated[
        Optional[list[str]],
        typer.Option(
            "--preload",
            "-p",
            help="Template fragment parsed before every input. Repeatable.",
            metavar="FILE",
        ),
    ] = None,
    missing_key: Annotated[
        Optional[MissingKeyPolicy],
        typer.Option(
            "--missing-key",
            help="Behaviour when a template references an absent key.",
            case_sensitive=False,
        ),
    ] = None,
    stop_on_error: Annotated[
        bool,
        typer.Option(
            "--stop-on-error",
            help="Shorthand for --missing-key error.",
        ),
    ] = False,
    include_env: Annotated[
        bool,
        typer.Option(
            "--env",
            help="Expose environment variables to templates under 'env'.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render template files and directories with the given values."""
    settings = Settings()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose or settings.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting tplrender")

    config = RendererConfig(
        inputs=tuple(inputs),
        preload_files=tuple(preloads or []),
        missing_key=resolve_missing_key(
            missing_key, stop_on_error, settings.missing_key
        ),
    )
    target = output if output is not None else settings.output

    logger.debug(
        f"Config: {len(config.inputs)} input(s), {len(config.preload_files)} "
        f"preload(s), missing key policy {config.missing_key.value}"
    )

    try:
        values = build_values(value_files or [], overrides or [], include_env)
        outputs = Renderer(config).execute(target, values)
    except (RenderError, ValuesError) as e:
        logger.error(str(e))
        raise typer.Exit(1)

    logger.debug(f"Completed: {len(outputs)} template(s) rendered")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
