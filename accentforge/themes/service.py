"""Recipe compile and export service."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from accentforge.errors import AccentForgeError, ErrorCode
from accentforge.themes.compiler import compile_recipe
from accentforge.themes.loader import derive_package_name
from accentforge.themes.models import ThemeRecipe
from accentforge.themes.registry import RecipeRegistry

if TYPE_CHECKING:
    from accentforge.config.settings import CompilerSettings

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".apk"


def archive_filename(theme_name: str) -> str:
    """File name for an exported theme, e.g. ``Ocean Blue`` -> ``Ocean_Blue.apk``."""
    name = re.sub(r'[<>:"/\\|?*]', "_", theme_name.strip().replace(" ", "_"))
    name = name.strip(". ")
    return f"{name or 'theme'}{ARCHIVE_SUFFIX}"


class ThemeService:
    """Compile registered recipes and persist the resulting archives."""

    def __init__(self, settings: CompilerSettings, registry: RecipeRegistry) -> None:
        self._settings = settings
        self._registry = registry

    @property
    def output_dir(self) -> Path:
        return self._settings.output_dir

    def reload_recipes(self) -> list[str]:
        self._registry.reload()
        return self._registry.load_errors()

    def available_recipes(self) -> list[ThemeRecipe]:
        return self._registry.list_recipes()

    def package_name_for(self, recipe: ThemeRecipe) -> str:
        return recipe.package_name or derive_package_name(self._settings.package_prefix, recipe.name)

    def compile_recipe(self, recipe_id: str) -> bytes:
        recipe = self._registry.get_recipe(recipe_id)
        if recipe is None:
            raise AccentForgeError(
                ErrorCode.RECIPE_NOT_FOUND,
                message=f"Recipe not found: {recipe_id}",
                details={"recipe_id": recipe_id},
            )
        return compile_recipe(recipe, self.package_name_for(recipe))

    def export_recipe(self, recipe_id: str, dest_dir: Path | None = None) -> tuple[bool, str]:
        """Compile ``recipe_id`` and write it into ``dest_dir`` (default: output dir)."""
        try:
            data = self.compile_recipe(recipe_id)
        except AccentForgeError as exc:
            return False, f"Could not compile recipe {recipe_id}: {exc.message}"

        recipe = self._registry.get_recipe(recipe_id)
        target_dir = dest_dir or self.output_dir
        target = target_dir / archive_filename(recipe.name)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.warning("export of %s to %s failed: %s", recipe_id, target, exc)
            return False, f"Could not save {target}: {exc}"
        logger.info("exported recipe %s to %s (%d bytes)", recipe_id, target, len(data))
        return True, str(target)
