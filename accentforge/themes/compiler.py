"""Theme compilation entry point."""

from __future__ import annotations

import logging
from typing import Mapping

from accentforge.core.seed import validate_and_normalize
from accentforge.errors import InvalidPackageName
from accentforge.themes.constants import DEFAULT_THEME_NAME
from accentforge.themes.documents import build_documents, has_invalid_xml_chars
from accentforge.themes.models import ComponentFlags, ThemeRecipe
from accentforge.themes.packager import package

logger = logging.getLogger(__name__)


def compile_theme(
    seed_hex: str,
    package_name: str,
    theme_name: str = DEFAULT_THEME_NAME,
    component_flags: Mapping[str, bool] | None = None,
) -> bytes:
    """Compile a seed color into overlay package bytes.

    Raises:
        InvalidColorFormat: ``seed_hex`` is not RRGGBB or AARRGGBB.
        InvalidPackageName: ``package_name`` is blank, multi-line or holds
            characters XML cannot carry.
        DocumentRenderError: a resource document failed to render, including a
            theme name with characters XML cannot carry.
        ArchiveWriteError: the archive could not be written.
    """
    seed = validate_and_normalize(seed_hex)
    cleaned_package = (package_name or "").strip()
    if (
        not cleaned_package
        or any(ch in cleaned_package for ch in ("\n", "\r", "\t"))
        or has_invalid_xml_chars(cleaned_package)
    ):
        raise InvalidPackageName(package_name)
    name = (theme_name or "").strip() or DEFAULT_THEME_NAME
    flags = ComponentFlags(component_flags)

    documents = build_documents(seed, cleaned_package, name, flags)
    data = package(documents)
    logger.debug(
        "compiled theme package=%s color=#%s components=%s bytes=%d",
        cleaned_package,
        seed.hex_rgb,
        ",".join(flags.enabled_names()) or "-",
        len(data),
    )
    return data


def compile_recipe(recipe: ThemeRecipe, package_name: str) -> bytes:
    """Compile a loaded theme recipe with an already resolved package name."""
    return compile_theme(recipe.seed, package_name, recipe.name, recipe.components)
