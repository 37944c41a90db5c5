# src/rosecheck/cli.py
"""Rosecheck Command Line Interface.

Entry point for the rosecheck CLI tool.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from rosecheck import __version__
from rosecheck.contracts import FatalOracleError
from rosecheck.core.config import CheckerSettings, ReplaySettings, load_settings
from rosecheck.engine import check as run_check

__all__ = ["app"]

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

app = typer.Typer(
    name="rosecheck",
    help="Rosecheck: property-based testing with shrinking.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rosecheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Rosecheck: property-based testing with shrinking."""
    # Logs go to stderr; the test report owns stdout
    from rosecheck.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "WARNING"
    configure_logging(json_output=json_logs, level=log_level)


def _load_module(module_ref: str) -> ModuleType:
    """Import a dotted module name, or load a .py file by path."""
    if not module_ref.endswith(".py"):
        return importlib.import_module(module_ref)

    path = Path(module_ref).expanduser().resolve()
    if not path.is_file():
        raise ImportError(f"No such file: {path}")
    spec = importlib.util.spec_from_file_location(path.stem, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[spec.name]
        raise
    return module


def _resolve_target(target: str) -> Any:
    """Load 'module:attribute' or 'path/to/file.py:attribute' and return the testable it names.

    Dotted module names must be importable from the current environment.
    A zero-argument callable is called to build the testable.

    Raises:
        ValueError: If target is not in module:attribute form.
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
    """
    module_ref, sep, attr_path = target.rpartition(":")
    if not sep or not module_ref or not attr_path:
        raise ValueError(f"Target must look like 'module:attribute', got {target!r}")

    obj: Any = _load_module(module_ref)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    if callable(obj):
        obj = obj()
    return obj


def _build_settings(
    settings_path: Path | None,
    overrides: dict[str, int | None],
    replay_seed: str | None,
    replay_size: int | None,
) -> CheckerSettings:
    base = load_settings(settings_path)
    data = base.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    if replay_seed is not None:
        data["replay"] = ReplaySettings(seed=replay_seed, size=replay_size).model_dump()
    return CheckerSettings(**data)


@app.command()
def check(
    target: str = typer.Argument(
        ...,
        help="Property to check, as 'module:attribute' or 'file.py:attribute' (a property or a zero-argument factory).",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    max_success: int | None = typer.Option(
        None,
        "--max-success",
        help="Successful tests required to pass.",
    ),
    max_discard: int | None = typer.Option(
        None,
        "--max-discard",
        help="Discarded tests tolerated before giving up.",
    ),
    max_size: int | None = typer.Option(
        None,
        "--max-size",
        help="Largest size hint handed to generators.",
    ),
    replay_seed: str | None = typer.Option(
        None,
        "--replay-seed",
        help="Seed printed by a failure report (requires --replay-size).",
    ),
    replay_size: int | None = typer.Option(
        None,
        "--replay-size",
        help="Size printed by a failure report (requires --replay-seed).",
    ),
    name: str | None = typer.Option(
        None,
        "--name",
        help="Proposition name for the report (defaults to TARGET).",
    ),
) -> None:
    """Check a property and exit 0 if it passed, 1 otherwise."""
    if (replay_seed is None) != (replay_size is None):
        typer.echo("Error: --replay-seed and --replay-size must be given together", err=True)
        raise typer.Exit(EXIT_USAGE)

    settings_path = Path(settings).expanduser() if settings is not None else None
    try:
        config = _build_settings(
            settings_path,
            {"max_success": max_success, "max_discard": max_discard, "max_size": max_size},
            replay_seed,
            replay_size,
        )
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(EXIT_USAGE) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(EXIT_USAGE) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(EXIT_USAGE) from None

    try:
        testable = _resolve_target(target)
    except (ValueError, ImportError, AttributeError) as e:
        typer.echo(f"Error: Cannot load {target}: {e}", err=True)
        raise typer.Exit(EXIT_USAGE) from None

    try:
        result = run_check(testable, name if name is not None else target, config)
    except TypeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_USAGE) from None
    except FatalOracleError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_FAILED) from None

    raise typer.Exit(EXIT_PASSED if result.passed else EXIT_FAILED)


if __name__ == "__main__":
    app()
