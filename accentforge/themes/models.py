"""Theme compiler models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from accentforge.themes.constants import COMPONENT_NAMES

logger = logging.getLogger(__name__)


class RecipeValidationError(ValueError):
    """Raised when a theme recipe file fails validation."""


class ComponentFlags(Mapping[str, bool]):
    """Read-only component toggles; unknown names are dropped, unset read False.

    Values must be real booleans. A string such as ``"false"`` raises
    :class:`TypeError` instead of being read by truthiness.
    """

    __slots__ = ("_enabled",)

    def __init__(self, flags: Mapping[str, bool] | None = None) -> None:
        enabled: set[str] = set()
        for name, value in (flags or {}).items():
            if name not in COMPONENT_NAMES:
                logger.warning("ignoring unknown component flag %r", name)
                continue
            if not isinstance(value, bool):
                raise TypeError(
                    f"component flag {name!r} must be a bool, got {type(value).__name__}"
                )
            if value:
                enabled.add(name)
        self._enabled = frozenset(enabled)

    @classmethod
    def of(cls, *names: str) -> ComponentFlags:
        return cls({name: True for name in names})

    def __getitem__(self, name: str) -> bool:
        if name not in COMPONENT_NAMES:
            raise KeyError(name)
        return name in self._enabled

    def __iter__(self) -> Iterator[str]:
        return iter(COMPONENT_NAMES)

    def __len__(self) -> int:
        return len(COMPONENT_NAMES)

    def enabled(self, name: str) -> bool:
        return name in self._enabled

    def enabled_names(self) -> tuple[str, ...]:
        return tuple(name for name in COMPONENT_NAMES if name in self._enabled)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ComponentFlags):
            return self._enabled == other._enabled
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._enabled)

    def __repr__(self) -> str:
        return f"ComponentFlags({dict(self)!r})"


@dataclass(frozen=True, slots=True)
class ResourceDocument:
    """One generated file inside the overlay archive."""

    path: str
    content: str

    def encoded(self) -> bytes:
        return self.content.encode("utf-8")


@dataclass(frozen=True, slots=True)
class ColorEntry:
    name: str
    argb: int


@dataclass(frozen=True, slots=True)
class ColorSection:
    """A commented group of color entries."""

    comment: str
    entries: tuple[ColorEntry, ...]


@dataclass(frozen=True, slots=True)
class ColorResources:
    """A ``<resources>`` colors document.

    ``base`` sections are always emitted. Each component section is optional
    and present only when that component is enabled.
    """

    base: tuple[ColorSection, ...]
    status_bar: ColorSection | None = None
    navigation_bar: ColorSection | None = None
    system_ui: ColorSection | None = None

    def sections(self) -> tuple[ColorSection, ...]:
        optional = (self.status_bar, self.navigation_bar, self.system_ui)
        return self.base + tuple(section for section in optional if section is not None)

    def entry_names(self) -> list[str]:
        return [entry.name for section in self.sections() for entry in section.entries]


@dataclass(frozen=True, slots=True)
class OverlayManifest:
    package_name: str
    label: str
    targets: tuple[tuple[str, str], ...]
    priority: int
    version_code: int = 1
    version_name: str = "1.0"


@dataclass(frozen=True, slots=True)
class OverlayDescriptor:
    package_name: str
    components: tuple[tuple[str, bool], ...]
    features: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ThemeRecipe:
    """A declarative theme definition parsed from a recipe file."""

    recipe_id: str
    name: str
    seed: str
    package_name: str = ""
    description: str = ""
    components: ComponentFlags = field(default_factory=ComponentFlags)
    is_builtin: bool = False
