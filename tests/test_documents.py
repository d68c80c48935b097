"""Tests for accentforge.themes.documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from accentforge.core.seed import validate_and_normalize
from accentforge.errors import DocumentRenderError
from accentforge.themes import documents
from accentforge.themes.constants import (
    ANDROID_NAMESPACE,
    ARCHIVE_LAYOUT,
    COMPONENT_NAMES,
    DYNAMIC_COLORS_PATH,
    LIGHT_COLORS_PATH,
    MANIFEST_PATH,
    NIGHT_COLORS_PATH,
    OVERLAY_CONFIG_PATH,
)
from accentforge.themes.documents import build_documents
from accentforge.themes.models import ComponentFlags

A = f"{{{ANDROID_NAMESPACE}}}"

STATUS_BAR_NAMES = {
    LIGHT_COLORS_PATH: {"system_status_bar_color", "system_notification_icon_color"},
    NIGHT_COLORS_PATH: {"system_status_bar_color"},
    DYNAMIC_COLORS_PATH: {
        "m3_sys_color_dynamic_system_status_bar",
        "m3_sys_color_dynamic_system_status_bar_icons",
    },
}
NAVIGATION_BAR_NAMES = {
    LIGHT_COLORS_PATH: {"system_navigation_bar_color", "system_navigation_bar_divider_color"},
    NIGHT_COLORS_PATH: {"system_navigation_bar_color"},
    DYNAMIC_COLORS_PATH: {
        "m3_sys_color_dynamic_system_nav_bar",
        "m3_sys_color_dynamic_system_nav_bar_divider",
    },
}
SYSTEM_UI_NAMES = {
    LIGHT_COLORS_PATH: {"system_ui_accent_color", "system_ui_background_color"},
}


def _build(seed: str = "#6200EE", **flags: bool) -> dict[str, str]:
    docs = build_documents(validate_and_normalize(seed), "com.example.theme", "Sample", flags)
    return {doc.path: doc.content for doc in docs}


def _colors(content: str) -> dict[str, str]:
    root = ET.fromstring(content)
    return {element.get("name"): element.text for element in root.findall("color")}


def test_five_documents_in_archive_order():
    docs = build_documents(validate_and_normalize("#6200EE"), "com.example.theme", "Sample")
    assert [doc.path for doc in docs] == list(ARCHIVE_LAYOUT)
    for doc in docs:
        assert doc.content.startswith('<?xml version="1.0" encoding="utf-8"?>')
        ET.fromstring(doc.content)


def test_manifest_declares_package_label_and_overlays():
    root = ET.fromstring(_build(seed="#FF6200EE")[MANIFEST_PATH])
    assert root.tag == "manifest"
    assert root.get("package") == "com.example.theme"
    overlays = root.findall("overlay")
    assert [(o.get(A + "targetPackage"), o.get(A + "category")) for o in overlays] == [
        ("android", "android.theme.customization.accent_color"),
        ("com.android.systemui", "android.theme.customization.status_bar"),
        ("com.android.systemui", "android.theme.customization.navigation_bar"),
    ]
    assert {o.get(A + "priority") for o in overlays} == {"1"}
    application = root.find("application")
    assert application.get(A + "label") == "Sample - #FF6200EE"
    assert application.get(A + "hasCode") == "false"


def test_manifest_text_uses_android_prefix():
    text = _build()[MANIFEST_PATH]
    assert f'xmlns:android="{ANDROID_NAMESPACE}"' in text
    assert 'android:label="Sample - #6200EE"' in text


def test_light_colors_base_entries():
    colors = _colors(_build()[LIGHT_COLORS_PATH])
    assert colors["system_accent_color_0"] == "#6200EE"
    assert colors["system_accent_color_1"] == "#7C1AFF"
    assert colors["system_accent_color_2"] == "#9533FF"
    assert colors["colorPrimary"] == "#6200EE"
    assert colors["colorPrimaryVariant"] == "#9533FF"
    assert colors["colorOnPrimary"] == "#FFFFFF"
    assert colors["oneui_accent"] == colors["oneui_control_normal"] == "#6200EE"
    assert colors["oneui_control_pressed"] == "#9533FF"
    assert {"colorSecondary", "colorSecondaryVariant", "colorOnSecondary"} <= colors.keys()


def test_hex_round_trip_through_documents():
    for raw, digits in (("#80112233", "112233"), ("abcdef", "ABCDEF"), ("#FF0000", "FF0000")):
        colors = _colors(_build(seed=raw)[LIGHT_COLORS_PATH])
        assert colors["colorPrimary"] == f"#{digits}"


def test_on_colors_black_for_light_seed():
    docs = _build(seed="#FFFF00", status_bar=True)
    light = _colors(docs[LIGHT_COLORS_PATH])
    dynamic = _colors(docs[DYNAMIC_COLORS_PATH])
    assert light["colorOnPrimary"] == "#000000"
    assert light["system_notification_icon_color"] == "#000000"
    assert dynamic["m3_sys_color_dynamic_system_status_bar_icons"] == "#000000"


def test_on_colors_white_for_dark_seed():
    docs = _build(seed="#202020", status_bar=True)
    light = _colors(docs[LIGHT_COLORS_PATH])
    dynamic = _colors(docs[DYNAMIC_COLORS_PATH])
    assert light["colorOnPrimary"] == "#FFFFFF"
    assert light["system_notification_icon_color"] == "#FFFFFF"
    assert dynamic["m3_sys_color_dynamic_system_status_bar_icons"] == "#FFFFFF"


def test_night_colors_reuse_triad_and_darken_components():
    night = _colors(_build(status_bar=True, navigation_bar=True)[NIGHT_COLORS_PATH])
    assert night["system_accent_color_0"] == "#6200EE"
    assert night["system_accent_color_1"] == "#7C1AFF"
    assert night["oneui_accent_night"] == "#6200EE"
    assert night["system_status_bar_color"] == "#4800D4"
    assert night["system_navigation_bar_color"] == "#4800D4"


def test_dynamic_colors_accent_and_neutral_entries():
    colors = _colors(_build()[DYNAMIC_COLORS_PATH])
    accent1 = [name for name in colors if name.startswith("system_accent1_")]
    assert accent1 == [f"system_accent1_{n}" for n in (0, 10, 50, 100, 200, 300, 400, 500, 600, 700, 800)]
    assert colors["system_accent1_0"] == "#C866FF"
    assert colors["system_accent1_300"] == "#6200EE"
    assert colors["system_accent1_800"] == "#00007B"
    assert len([n for n in colors if n.startswith("system_accent2_")]) == 3
    assert len([n for n in colors if n.startswith("system_accent3_")]) == 3
    assert colors["system_accent2_200"] == "#6200EE"
    assert colors["system_accent3_200"] == "#4800D4"
    neutral = [n for n in colors if n.startswith("system_neutral1_")]
    assert neutral[0] == "system_neutral1_0"
    assert neutral[-1] == "system_neutral1_1000"
    assert colors["system_neutral1_200"] == "#6200EE"
    assert colors["system_neutral1_1000"] == "#000000"


@pytest.mark.parametrize(
    "component, names",
    [("status_bar", STATUS_BAR_NAMES), ("navigation_bar", NAVIGATION_BAR_NAMES), ("system_ui", SYSTEM_UI_NAMES)],
)
def test_component_entries_gated_by_flag(component, names):
    disabled = _build()
    explicit_off = _build(**{component: False})
    enabled = _build(**{component: True})
    for path, expected in names.items():
        assert expected <= _colors(enabled[path]).keys()
        assert not expected & _colors(disabled[path]).keys()
        assert not expected & _colors(explicit_off[path]).keys()


def test_descriptor_lists_every_component_and_features():
    root = ET.fromstring(_build(status_bar=True, launcher=True)[OVERLAY_CONFIG_PATH])
    assert root.tag == "theming-config"
    assert root.findtext("package") == "com.example.theme"
    components = {c.get("name"): c.get("enabled") for c in root.find("components")}
    assert list(components) == list(COMPONENT_NAMES)
    assert components == {
        "status_bar": "true",
        "navigation_bar": "false",
        "system_ui": "false",
        "settings": "false",
        "launcher": "true",
    }
    features = {f.get("name"): f.get("enabled") for f in root.find("features")}
    assert features == {
        "material_you_override": "true",
        "high_contrast_injection": "true",
        "dynamic_colors": "true",
    }


def test_unknown_flags_are_ignored():
    docs = _build(wallpaper=True)
    root = ET.fromstring(docs[OVERLAY_CONFIG_PATH])
    assert "wallpaper" not in {c.get("name") for c in root.find("components")}


def test_models_expose_optional_sections():
    seed = validate_and_normalize("#6200EE")
    model = documents.light_colors_model(seed, ComponentFlags.of("navigation_bar"))
    assert model.status_bar is None
    assert model.system_ui is None
    assert model.navigation_bar is not None
    assert "system_navigation_bar_color" in model.entry_names()


def test_render_failure_wrapped(monkeypatch):
    def boom(*_args, **_kwargs):
        raise RuntimeError("template exploded")

    monkeypatch.setattr(documents, "night_colors_model", boom)
    with pytest.raises(DocumentRenderError) as excinfo:
        build_documents(validate_and_normalize("#6200EE"), "com.example.theme", "Sample")
    assert excinfo.value.path == NIGHT_COLORS_PATH
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_characters_outside_xml_are_a_render_failure():
    with pytest.raises(DocumentRenderError) as excinfo:
        build_documents(validate_and_normalize("#6200EE"), "com.example\x0bbad", "Sample")
    assert excinfo.value.path == MANIFEST_PATH
    assert "U+000B" in str(excinfo.value)


def test_component_flags_require_booleans():
    with pytest.raises(TypeError):
        ComponentFlags({"navigation_bar": 1})
    assert ComponentFlags({"navigation_bar": True}).enabled("navigation_bar")
