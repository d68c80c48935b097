"""Command line bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import click

from accentforge.config.settings import CompilerSettings
from accentforge.errors import AccentForgeError, format_error_for_user
from accentforge.runtime_paths import builtin_recipes_root, package_root
from accentforge.themes.compiler import compile_theme
from accentforge.themes.constants import COMPONENT_NAMES
from accentforge.themes.registry import RecipeRegistry
from accentforge.themes.service import ThemeService, archive_filename


def _configure_startup_logger(settings: CompilerSettings) -> logging.Logger:
    logger = logging.getLogger("accentforge.startup")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "accentforge.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _build_service(settings: CompilerSettings, logger: logging.Logger) -> ThemeService:
    builtin = builtin_recipes_root()
    if not builtin.exists():
        logger.warning("builtin recipe root missing at %s", builtin)
    service = ThemeService(settings, RecipeRegistry(builtin_root=builtin, user_root=settings.recipes_dir))
    errors = service.reload_recipes()
    if errors:
        logger.warning("recipe load warnings: %s", " | ".join(errors[:6]))
    return service


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML file",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None) -> None:
    """Compile an accent color into a system overlay package."""
    settings = CompilerSettings.load(config)
    logger = _configure_startup_logger(settings)
    logger.info("startup package_root=%s", package_root())
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["logger"] = logger


@cli.command("compile")
@click.argument("seed")
@click.argument("package")
@click.option("--name", default=None, help="Theme display name")
@click.option(
    "--component",
    "components",
    multiple=True,
    type=click.Choice(COMPONENT_NAMES),
    help="Enable a themed component (can be used multiple times)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Archive path",
)
@click.pass_context
def compile_command(
    ctx: click.Context,
    seed: str,
    package: str,
    name: str | None,
    components: tuple[str, ...],
    output: Path | None,
) -> int:
    """Compile a seed color (RRGGBB or AARRGGBB) into an overlay archive."""
    settings: CompilerSettings = ctx.obj["settings"]
    logger: logging.Logger = ctx.obj["logger"]
    theme_name = name or settings.default_theme_name
    enabled = components or settings.default_components
    data = compile_theme(seed, package, theme_name, {component: True for component in enabled})
    output = output or settings.output_dir / archive_filename(theme_name)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
    except OSError as exc:
        logger.warning("could not write %s: %s", output, exc)
        click.echo(f"Could not write {output}: {exc}", err=True)
        return 1
    logger.info("compiled %s color=%s -> %s", package, seed, output)
    click.echo(str(output))
    return 0


@cli.command("recipes")
@click.pass_context
def recipes_command(ctx: click.Context) -> int:
    """List available theme recipes."""
    service = _build_service(ctx.obj["settings"], ctx.obj["logger"])
    for recipe in service.available_recipes():
        origin = "builtin" if recipe.is_builtin else "user"
        enabled = ",".join(recipe.components.enabled_names()) or "-"
        click.echo(f"{recipe.recipe_id}\t{recipe.name}\t{recipe.seed}\t{enabled}\t{origin}")
    return 0


@cli.command("export")
@click.argument("recipe_id")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination folder (defaults to the configured output folder)",
)
@click.pass_context
def export_command(ctx: click.Context, recipe_id: str, output_dir: Path | None) -> int:
    """Compile a recipe into the output folder."""
    service = _build_service(ctx.obj["settings"], ctx.obj["logger"])
    ok, message = service.export_recipe(recipe_id, output_dir)
    click.echo(message, err=not ok)
    return 0 if ok else 1


def run_app(argv: list[str] | None = None) -> int:
    """Run one command; return the process exit code."""
    try:
        result = cli.main(args=argv, prog_name="accentforge", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except AccentForgeError as exc:
        logging.getLogger("accentforge.startup").error("command failed: %s", exc.to_dict())
        click.echo(format_error_for_user(exc), err=True)
        return 1
    return result if isinstance(result, int) else 0
