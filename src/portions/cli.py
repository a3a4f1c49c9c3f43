"""CLI entrypoint for class portions."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError

app = typer.Typer(
    name="portions",
    help="Class portions: show how a class's attributes and operations depend on each other.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors."),
) -> None:
    """Configure logging for all commands."""
    level = "ERROR" if quiet else "DEBUG" if verbose else "WARNING"
    logger.remove()
    logger.add(sys.stderr, level=level)


@app.command()
def show(
    class_name: str = typer.Argument(..., help="Name of the class to build the portion graph for."),
    model: Path | None = typer.Option(None, "--model", "-m", help="Model snapshot JSON (default: settings)."),
    format_: str | None = typer.Option(None, "--format", "-f", help="Output format: table, json, dot, mermaid."),
    linear_index: bool = typer.Option(False, "--linear-index", help="Look nodes up by linear scan."),
) -> None:
    """Build and print the portion graph of one class."""
    from portions.graph import PortionGraph
    from portions.render import OUTPUT_FORMATS, render

    settings = _load_settings()
    fmt = format_ or settings.render.format
    if fmt not in OUTPUT_FORMATS:
        logger.error("Unknown output format '{}' (use {})", fmt, ", ".join(OUTPUT_FORMATS))
        raise typer.Exit(code=1)

    object_model = _load_model(model or settings.snapshot_path)
    graph = PortionGraph(object_model, hash_index=settings.graph.hash_index and not linear_index)
    graph.clear_and_add_class(class_name)
    type_ = object_model.find_type(class_name)
    if type_ is None or type_.get_class() is None:
        logger.warning("No class named '{}' in the model", class_name)
    typer.echo(render(graph, fmt, rankdir=settings.render.rankdir))


@app.command()
def classes(
    model: Path | None = typer.Option(None, "--model", "-m", help="Model snapshot JSON (default: settings)."),
) -> None:
    """List the classes in a model snapshot."""
    object_model = _load_model(model or _load_settings().snapshot_path)
    for cls in object_model.classifiers():
        typer.echo(f"{cls.name}\tattributes={len(cls.attributes)}\toperations={len(cls.operations)}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_settings():
    """Read settings, turning invalid values into exit code 1."""
    from portions.settings import PortionSettings

    try:
        return PortionSettings()
    except ValidationError as exc:
        logger.error("Invalid settings: {} error(s)\n{}", exc.error_count(), exc)
        raise typer.Exit(code=1) from exc


def _load_model(path: Path | None):
    """Load a snapshot, turning every load failure into exit code 1."""
    from portions.model import load_snapshot

    if path is None:
        logger.error("No model snapshot given (use --model or set PORTIONS_SNAPSHOT_PATH)")
        raise typer.Exit(code=1)
    try:
        return load_snapshot(path)
    except FileNotFoundError as exc:
        logger.error("Model snapshot not found: {}", path)
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        logger.error("Cannot read model snapshot {}: {}", path, exc)
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        logger.error("Invalid model snapshot {}: {} error(s)\n{}", path, exc.error_count(), exc)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        logger.error("Invalid model snapshot {}: {}", path, exc)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
