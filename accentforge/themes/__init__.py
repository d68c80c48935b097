"""Overlay theme compiler exports."""

from accentforge.themes.compiler import compile_recipe, compile_theme
from accentforge.themes.constants import ARCHIVE_LAYOUT, COMPONENT_NAMES, DEFAULT_THEME_NAME
from accentforge.themes.documents import build_documents
from accentforge.themes.models import (
    ComponentFlags,
    RecipeValidationError,
    ResourceDocument,
    ThemeRecipe,
)
from accentforge.themes.packager import package
from accentforge.themes.registry import RecipeRegistry
from accentforge.themes.service import ThemeService

__all__ = [
    "ARCHIVE_LAYOUT",
    "COMPONENT_NAMES",
    "DEFAULT_THEME_NAME",
    "ComponentFlags",
    "RecipeValidationError",
    "ResourceDocument",
    "ThemeRecipe",
    "RecipeRegistry",
    "ThemeService",
    "build_documents",
    "compile_recipe",
    "compile_theme",
    "package",
]
