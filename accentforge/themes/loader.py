"""Theme recipe parsing and validation."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

import yaml

from accentforge.core.seed import validate_and_normalize
from accentforge.errors import InvalidColorFormat
from accentforge.themes.constants import COMPONENT_NAMES, RECIPE_SCHEMA_VERSION
from accentforge.themes.models import ComponentFlags, RecipeValidationError, ThemeRecipe

_RECIPE_ID_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")
_PACKAGE_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*(?:\.[a-zA-Z][a-zA-Z0-9_]*)+$")
_SLUG_DROP_RE = re.compile(r"[^a-z0-9_]")

_MAX_RECIPE_BYTES = 16 * 1024
_MAX_RECIPE_ID_LEN = 64
_MAX_SHORT_FIELD_LEN = 120
_MAX_DESC_LEN = 240
_MAX_PACKAGE_NAME_LEN = 200

_ALLOWED_KEYS = {
    "schema_version",
    "recipe_id",
    "name",
    "seed",
    "package_name",
    "description",
    "components",
}


def load_recipe(path: Path, *, is_builtin: bool = False) -> ThemeRecipe:
    """Load and validate a single recipe file."""
    if not path.exists() or not path.is_file():
        raise RecipeValidationError(f"Recipe path is not a file: {path}")
    if path.is_symlink():
        raise RecipeValidationError(f"Recipe file cannot be a symlink: {path}")
    data = _load_yaml(path, max_bytes=_MAX_RECIPE_BYTES)
    return parse_recipe(data, context=str(path), is_builtin=is_builtin)


def parse_recipe(
    data: Mapping[str, object],
    *,
    context: str = "<recipe>",
    is_builtin: bool = False,
) -> ThemeRecipe:
    """Validate a recipe mapping and build a :class:`ThemeRecipe`."""
    unknown = sorted(str(key) for key in data.keys() if key not in _ALLOWED_KEYS)
    if unknown:
        raise RecipeValidationError(f"{context}: unsupported keys found: {', '.join(unknown)}")

    schema_version = str(data.get("schema_version", RECIPE_SCHEMA_VERSION)).strip()
    if schema_version != RECIPE_SCHEMA_VERSION:
        raise RecipeValidationError(
            f"{context}: unsupported schema_version {schema_version!r}; "
            f"expected {RECIPE_SCHEMA_VERSION!r}"
        )

    recipe_id = _required_str(data, "recipe_id", context, max_len=_MAX_RECIPE_ID_LEN)
    if not _RECIPE_ID_RE.match(recipe_id):
        raise RecipeValidationError(
            f"{context}: recipe_id must match pattern [a-z0-9-], got {recipe_id!r}"
        )

    seed = _required_str(data, "seed", context, max_len=16)
    try:
        validate_and_normalize(seed)
    except InvalidColorFormat as exc:
        raise RecipeValidationError(f"{context}: {exc.message}") from exc

    package_name = _optional_str(data, "package_name", context, max_len=_MAX_PACKAGE_NAME_LEN)
    if package_name and not _PACKAGE_NAME_RE.match(package_name):
        raise RecipeValidationError(
            f"{context}: package_name must be a dotted identifier, got {package_name!r}"
        )

    return ThemeRecipe(
        recipe_id=recipe_id,
        name=_required_str(data, "name", context, max_len=_MAX_SHORT_FIELD_LEN),
        seed=seed,
        package_name=package_name,
        description=_optional_str(data, "description", context, max_len=_MAX_DESC_LEN),
        components=_parse_components(data.get("components"), context),
        is_builtin=is_builtin,
    )


def derive_package_name(prefix: str, theme_name: str) -> str:
    """Build ``{prefix}.{slug}`` from a display name, e.g. ``Ocean Blue`` -> ``ocean_blue``."""
    slug = _SLUG_DROP_RE.sub("", theme_name.strip().replace(" ", "_").lower())
    if not slug or not slug[0].isalpha():
        slug = f"t{slug}"
    return f"{prefix}.{slug}"


def _parse_components(raw: object, context: str) -> ComponentFlags:
    if raw is None:
        return ComponentFlags()
    if isinstance(raw, list):
        names = raw
    elif isinstance(raw, dict):
        for value in raw.values():
            if not isinstance(value, bool):
                raise RecipeValidationError(f"{context}: component values must be true or false")
        names = [name for name, enabled in raw.items() if enabled]
        unknown = sorted(str(name) for name in raw if name not in COMPONENT_NAMES)
        if unknown:
            raise RecipeValidationError(f"{context}: unknown components: {', '.join(unknown)}")
    else:
        raise RecipeValidationError(f"{context}: components must be a list or a mapping")

    unknown = sorted(str(name) for name in names if name not in COMPONENT_NAMES)
    if unknown:
        raise RecipeValidationError(f"{context}: unknown components: {', '.join(unknown)}")
    return ComponentFlags.of(*names)


def _required_str(data: Mapping[str, object], key: str, context: str, *, max_len: int) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise RecipeValidationError(f"{context}: field {key!r} must be a non-empty string")
    return _check_line(value.strip(), key, context, max_len=max_len)


def _optional_str(data: Mapping[str, object], key: str, context: str, *, max_len: int) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RecipeValidationError(f"{context}: field {key!r} must be a string")
    return _check_line(value.strip(), key, context, max_len=max_len)


def _check_line(cleaned: str, key: str, context: str, *, max_len: int) -> str:
    if len(cleaned) > max_len:
        raise RecipeValidationError(f"{context}: field {key!r} exceeds max length {max_len}")
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise RecipeValidationError(f"{context}: field {key!r} must be a single line string")
    return cleaned


def _load_yaml(path: Path, *, max_bytes: int) -> Mapping[str, object]:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise RecipeValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise RecipeValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise RecipeValidationError(f"Unable to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RecipeValidationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise RecipeValidationError(f"Expected YAML mapping in {path}")
    return data
