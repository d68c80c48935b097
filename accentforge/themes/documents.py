"""Resource document builders for the overlay package.

Each document is first described as a small immutable model (manifest,
color resources, overlay descriptor) and then rendered to XML text. Entries
gated by a component flag live in optional sections of
:class:`ColorResources`; a disabled component leaves its section as ``None``.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Callable, Mapping

from accentforge.core.colors import on_color, shift_additive, to_hex
from accentforge.core.seed import SeedColor
from accentforge.core.tones import TONE_STOPS, ToneRamp, generate_tones
from accentforge.errors import DocumentRenderError
from accentforge.themes.constants import (
    ACCENT1_SUFFIXES,
    ALWAYS_ON_FEATURES,
    ANDROID_NAMESPACE,
    COMPONENT_NAMES,
    DYNAMIC_COLORS_PATH,
    LIGHT_COLORS_PATH,
    MANIFEST_PATH,
    NAVIGATION_BAR,
    NEUTRAL1_SHIFTS,
    NIGHT_COLORS_PATH,
    OVERLAY_CONFIG_PATH,
    OVERLAY_PRIORITY,
    OVERLAY_TARGETS,
    STATUS_BAR,
    SYSTEM_UI,
)
from accentforge.themes.models import (
    ColorEntry,
    ColorResources,
    ColorSection,
    ComponentFlags,
    OverlayDescriptor,
    OverlayManifest,
    ResourceDocument,
)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
_INDENT = "    "
_XML_INVALID_CHAR_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

ET.register_namespace("android", ANDROID_NAMESPACE)


def _android(attr: str) -> str:
    return f"{{{ANDROID_NAMESPACE}}}{attr}"


def _section(comment: str, *entries: tuple[str, int]) -> ColorSection:
    return ColorSection(comment, tuple(ColorEntry(name, value) for name, value in entries))


def _accent_triad(seed: int) -> ColorSection:
    return _section(
        "Generated from hex color",
        ("system_accent_color_0", seed),
        ("system_accent_color_1", shift_additive(seed, 0.1)),
        ("system_accent_color_2", shift_additive(seed, 0.2)),
    )


# -- models --


def manifest_model(seed: SeedColor, package_name: str, theme_name: str) -> OverlayManifest:
    label_color = seed.raw or f"#{seed.hex_rgb}"
    return OverlayManifest(
        package_name=package_name,
        label=f"{theme_name} - {label_color}",
        targets=OVERLAY_TARGETS,
        priority=OVERLAY_PRIORITY,
    )


def light_colors_model(seed: SeedColor, flags: ComponentFlags) -> ColorResources:
    color = seed.argb
    secondary = shift_additive(color, 0.3, lighter=True)
    base = (
        _accent_triad(color),
        _section(
            "Standard Material colors",
            ("colorPrimary", color),
            ("colorPrimaryVariant", shift_additive(color, 0.2)),
            ("colorOnPrimary", on_color(color)),
            ("colorSecondary", secondary),
            ("colorSecondaryVariant", shift_additive(color, 0.5, lighter=True)),
            ("colorOnSecondary", on_color(secondary)),
        ),
        _section(
            "Vendor accent aliases",
            ("oneui_accent", color),
            ("oneui_control_normal", color),
            ("oneui_control_pressed", shift_additive(color, 0.2)),
        ),
    )
    status_bar = navigation_bar = system_ui = None
    if flags.enabled(STATUS_BAR):
        status_bar = _section(
            "Status bar",
            ("system_status_bar_color", color),
            ("system_notification_icon_color", on_color(color)),
        )
    if flags.enabled(NAVIGATION_BAR):
        navigation_bar = _section(
            "Navigation bar",
            ("system_navigation_bar_color", color),
            ("system_navigation_bar_divider_color", shift_additive(color, 0.3)),
        )
    if flags.enabled(SYSTEM_UI):
        system_ui = _section(
            "System UI",
            ("system_ui_accent_color", color),
            ("system_ui_background_color", shift_additive(color, 0.8, lighter=True)),
        )
    return ColorResources(base, status_bar, navigation_bar, system_ui)


def night_colors_model(seed: SeedColor, flags: ComponentFlags) -> ColorResources:
    color = seed.argb
    darker = shift_additive(color, 0.1, lighter=False)
    base = (
        _accent_triad(color),
        _section("Night mode specific colors", ("oneui_accent_night", color)),
    )
    status_bar = navigation_bar = None
    if flags.enabled(STATUS_BAR):
        status_bar = _section("Status bar", ("system_status_bar_color", darker))
    if flags.enabled(NAVIGATION_BAR):
        navigation_bar = _section("Navigation bar", ("system_navigation_bar_color", darker))
    return ColorResources(base, status_bar, navigation_bar)


def dynamic_colors_model(
    seed: SeedColor,
    flags: ComponentFlags,
    tones: ToneRamp | None = None,
) -> ColorResources:
    color = seed.argb
    ramp = tones if tones is not None else generate_tones(color)
    accent1 = tuple(
        ColorEntry(f"system_accent1_{suffix}", ramp[stop])
        for suffix, stop in zip(ACCENT1_SUFFIXES, TONE_STOPS)
    )
    neutral1 = tuple(
        ColorEntry(f"system_neutral1_{suffix}", shift_additive(color, factor, lighter=lighter))
        for suffix, factor, lighter in NEUTRAL1_SHIFTS
    )
    base = (
        ColorSection("Dynamic accent tones", accent1),
        _section(
            "Secondary accent colors",
            ("system_accent2_0", shift_additive(color, 0.3, lighter=True)),
            ("system_accent2_100", shift_additive(color, 0.1, lighter=True)),
            ("system_accent2_200", color),
        ),
        _section(
            "Tertiary accent colors",
            ("system_accent3_0", shift_additive(color, 0.5, lighter=True)),
            ("system_accent3_100", shift_additive(color, 0.2, lighter=True)),
            ("system_accent3_200", shift_additive(color, 0.1, lighter=False)),
        ),
        ColorSection("Neutral colors based on primary", neutral1),
    )
    status_bar = navigation_bar = None
    if flags.enabled(STATUS_BAR):
        status_bar = _section(
            "Status bar",
            ("m3_sys_color_dynamic_system_status_bar", color),
            ("m3_sys_color_dynamic_system_status_bar_icons", on_color(color)),
        )
    if flags.enabled(NAVIGATION_BAR):
        navigation_bar = _section(
            "Navigation bar",
            ("m3_sys_color_dynamic_system_nav_bar", color),
            ("m3_sys_color_dynamic_system_nav_bar_divider", shift_additive(color, 0.3)),
        )
    return ColorResources(base, status_bar, navigation_bar)


def descriptor_model(package_name: str, flags: ComponentFlags) -> OverlayDescriptor:
    return OverlayDescriptor(
        package_name=package_name,
        components=tuple((name, flags.enabled(name)) for name in COMPONENT_NAMES),
        features=ALWAYS_ON_FEATURES,
    )


# -- rendering --


def render_manifest(model: OverlayManifest) -> str:
    root = ET.Element(
        "manifest",
        {
            "package": model.package_name,
            _android("versionCode"): str(model.version_code),
            _android("versionName"): model.version_name,
        },
    )
    for target_package, category in model.targets:
        ET.SubElement(
            root,
            "overlay",
            {
                _android("targetPackage"): target_package,
                _android("category"): category,
                _android("priority"): str(model.priority),
            },
        )
    ET.SubElement(
        root,
        "application",
        {_android("label"): model.label, _android("hasCode"): "false"},
    )
    return _serialize(root)


def render_colors(model: ColorResources) -> str:
    root = ET.Element("resources")
    for section in model.sections():
        root.append(ET.Comment(f" {section.comment} "))
        for entry in section.entries:
            element = ET.SubElement(root, "color", {"name": entry.name})
            element.text = f"#{to_hex(entry.argb)}"
    return _serialize(root)


def render_descriptor(model: OverlayDescriptor) -> str:
    root = ET.Element("theming-config")
    ET.SubElement(root, "package").text = model.package_name
    components = ET.SubElement(root, "components")
    for name, enabled in model.components:
        ET.SubElement(components, "component", {"name": name, "enabled": _xml_bool(enabled)})
    features = ET.SubElement(root, "features")
    for name in model.features:
        ET.SubElement(features, "feature", {"name": name, "enabled": "true"})
    return _serialize(root)


def _serialize(root: ET.Element) -> str:
    ET.indent(root, space=_INDENT)
    body = ET.tostring(root, encoding="unicode")
    match = _XML_INVALID_CHAR_RE.search(body)
    if match:
        raise ValueError(f"character U+{ord(match.group()):04X} is not allowed in XML 1.0")
    return XML_DECLARATION + body + "\n"


def has_invalid_xml_chars(text: str) -> bool:
    return _XML_INVALID_CHAR_RE.search(text) is not None


def _xml_bool(value: bool) -> str:
    return "true" if value else "false"


def build_documents(
    seed: SeedColor,
    package_name: str,
    theme_name: str,
    flags: ComponentFlags | Mapping[str, bool] | None = None,
) -> list[ResourceDocument]:
    """Render the five overlay documents in archive order.

    Raises:
        DocumentRenderError: if any document fails to render. No partial
            result is returned.
    """
    components = flags if isinstance(flags, ComponentFlags) else ComponentFlags(flags)
    renderers: tuple[tuple[str, Callable[[], str]], ...] = (
        (MANIFEST_PATH, lambda: render_manifest(manifest_model(seed, package_name, theme_name))),
        (LIGHT_COLORS_PATH, lambda: render_colors(light_colors_model(seed, components))),
        (NIGHT_COLORS_PATH, lambda: render_colors(night_colors_model(seed, components))),
        (DYNAMIC_COLORS_PATH, lambda: render_colors(dynamic_colors_model(seed, components))),
        (OVERLAY_CONFIG_PATH, lambda: render_descriptor(descriptor_model(package_name, components))),
    )
    documents: list[ResourceDocument] = []
    for path, render in renderers:
        try:
            content = render()
        except Exception as exc:
            raise DocumentRenderError(path, exc) from exc
        documents.append(ResourceDocument(path=path, content=content))
    return documents
