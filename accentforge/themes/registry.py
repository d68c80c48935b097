"""Theme recipe catalog.

Recipes come from two layers. Built-in recipe files ship with the package;
user recipe files live in the configured recipes folder and replace a
built-in recipe with the same ``recipe_id``. The replaced built-in stays
reachable through :meth:`RecipeRegistry.shadowed_builtin`.
"""

from __future__ import annotations

from pathlib import Path

from accentforge.themes.loader import load_recipe
from accentforge.themes.models import RecipeValidationError, ThemeRecipe

MAX_RECIPE_FILES = 512
RECIPE_SUFFIXES = (".yaml", ".yml")


def scan_recipe_files(root: Path) -> tuple[list[Path], list[str]]:
    """List recipe files directly under ``root`` in name order.

    Returns the files and any problems met while listing. Symlinks are
    skipped, and only the first ``MAX_RECIPE_FILES`` files are kept.
    """
    if not root.is_dir():
        return [], []
    problems: list[str] = []
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        return [], [f"Failed to list recipes in {root}: {exc}"]

    files: list[Path] = []
    for path in entries:
        if path.suffix.lower() not in RECIPE_SUFFIXES or path.is_dir():
            continue
        if path.is_symlink():
            problems.append(f"Skipping symlink recipe file: {path}")
            continue
        files.append(path)
    if len(files) > MAX_RECIPE_FILES:
        problems.append(
            f"Recipe file limit exceeded in {root}; only first {MAX_RECIPE_FILES} files were read."
        )
        files = files[:MAX_RECIPE_FILES]
    return files, problems


class RecipeRegistry:
    """Built-in and user theme recipes keyed by ``recipe_id``."""

    def __init__(self, builtin_root: Path, user_root: Path) -> None:
        self._builtin_root = builtin_root
        self._user_root = user_root
        self._recipes: dict[str, ThemeRecipe] = {}
        self._paths: dict[str, Path] = {}
        self._shadowed: dict[str, ThemeRecipe] = {}
        self._load_errors: list[str] = []

    def reload(self) -> None:
        self._recipes = {}
        self._paths = {}
        self._shadowed = {}
        self._load_errors = []
        for path, recipe in self._read_layer(self._builtin_root, is_builtin=True):
            self._add_builtin(path, recipe)
        for path, recipe in self._read_layer(self._user_root, is_builtin=False):
            self._add_user(path, recipe)

    def list_recipes(self) -> list[ThemeRecipe]:
        """Built-in recipes first, each group ordered by display name."""
        return sorted(
            self._recipes.values(),
            key=lambda recipe: (not recipe.is_builtin, recipe.name.lower(), recipe.recipe_id),
        )

    def get_recipe(self, recipe_id: str) -> ThemeRecipe | None:
        return self._recipes.get(recipe_id)

    def recipe_path(self, recipe_id: str) -> Path | None:
        """File the active recipe for ``recipe_id`` was read from."""
        return self._paths.get(recipe_id)

    def shadowed_builtin(self, recipe_id: str) -> ThemeRecipe | None:
        """Built-in recipe replaced by a user recipe, if any."""
        return self._shadowed.get(recipe_id)

    def load_errors(self) -> list[str]:
        return list(self._load_errors)

    def _read_layer(self, root: Path, *, is_builtin: bool) -> list[tuple[Path, ThemeRecipe]]:
        files, problems = scan_recipe_files(root)
        self._load_errors.extend(problems)
        loaded: list[tuple[Path, ThemeRecipe]] = []
        for path in files:
            try:
                loaded.append((path, load_recipe(path, is_builtin=is_builtin)))
            except RecipeValidationError as exc:
                self._load_errors.append(str(exc))
        return loaded

    def _add_builtin(self, path: Path, recipe: ThemeRecipe) -> None:
        recipe_id = recipe.recipe_id
        if recipe_id in self._recipes:
            self._load_errors.append(
                f"Duplicate builtin recipe id {recipe_id!r} at {path}; "
                f"keeping {self._paths[recipe_id].name}."
            )
            return
        self._recipes[recipe_id] = recipe
        self._paths[recipe_id] = path

    def _add_user(self, path: Path, recipe: ThemeRecipe) -> None:
        recipe_id = recipe.recipe_id
        current = self._recipes.get(recipe_id)
        if current is not None and current.is_builtin:
            self._shadowed[recipe_id] = current
            self._load_errors.append(f"User recipe {recipe_id!r} overrides built-in recipe.")
        elif current is not None:
            self._load_errors.append(
                f"Duplicate user recipe id {recipe_id!r} at {path}; "
                f"keeping {self._paths[recipe_id].name}."
            )
            return
        self._recipes[recipe_id] = recipe
        self._paths[recipe_id] = path
