"""End-to-end tests for accentforge.themes.compiler."""

from __future__ import annotations

import io
import zipfile
from concurrent.futures import ThreadPoolExecutor

import pytest

from accentforge.errors import DocumentRenderError, InvalidColorFormat, InvalidPackageName
from accentforge.themes.compiler import compile_recipe, compile_theme
from accentforge.themes.constants import ARCHIVE_LAYOUT, LIGHT_COLORS_PATH, MANIFEST_PATH
from accentforge.themes.models import ComponentFlags, ThemeRecipe


def _open(data: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(data))


def test_sample_scenario():
    data = compile_theme(
        "#FF6200EE",
        "com.example.theme",
        "Sample",
        {"status_bar": True, "navigation_bar": False},
    )
    with _open(data) as archive:
        assert archive.namelist() == list(ARCHIVE_LAYOUT)
        manifest = archive.read("AndroidManifest.xml").decode("utf-8")
        light = archive.read("res/values/colors.xml").decode("utf-8")
    assert 'android:label="Sample - #FF6200EE"' in manifest
    assert 'name="system_status_bar_color"' in light
    assert 'name="system_navigation_bar_color"' not in light


def test_compile_is_idempotent():
    args = ("#1565C0", "com.example.ocean", "Ocean", {"system_ui": True})
    assert compile_theme(*args) == compile_theme(*args)


def test_compile_defaults():
    with _open(compile_theme("00FF00", "com.example.green")) as archive:
        manifest = archive.read("AndroidManifest.xml").decode("utf-8")
        config = archive.read("assets/overlays/config.xml").decode("utf-8")
    assert 'android:label="Custom Theme - 00FF00"' in manifest
    assert 'enabled="true"' not in config.split("<features>")[0]


def test_blank_theme_name_falls_back():
    with _open(compile_theme("00FF00", "com.example.green", "  ")) as archive:
        manifest = archive.read("AndroidManifest.xml").decode("utf-8")
    assert "Custom Theme - 00FF00" in manifest


@pytest.mark.parametrize("seed", ["12345", "GGHHII", "#1234567"])
def test_invalid_seed_aborts(seed):
    with pytest.raises(InvalidColorFormat):
        compile_theme(seed, "com.example.theme")


@pytest.mark.parametrize(
    "package_name",
    ["", "   ", "com.example\ntheme", "com.example\x01bad", "com.example\x1fbad"],
)
def test_invalid_package_name_aborts(package_name):
    with pytest.raises(InvalidPackageName):
        compile_theme("#6200EE", package_name)


def test_parallel_calls_are_isolated():
    jobs = [("#6200EE", "com.example.a"), ("#1565C0", "com.example.b")] * 8
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda job: compile_theme(*job), jobs))
    assert len(set(results)) == 2
    assert results[0] == compile_theme("#6200EE", "com.example.a")


def test_compile_recipe_uses_recipe_fields():
    recipe = ThemeRecipe(
        recipe_id="violet",
        name="Violet",
        seed="#6200EE",
        components=ComponentFlags.of("navigation_bar"),
    )
    data = compile_recipe(recipe, "com.example.violet")
    assert data == compile_theme("#6200EE", "com.example.violet", "Violet", {"navigation_bar": True})


def test_theme_name_with_control_character_fails_render():
    with pytest.raises(DocumentRenderError) as excinfo:
        compile_theme("#6200EE", "com.example.theme", "Bad\x07Name")
    assert excinfo.value.path == MANIFEST_PATH


def test_string_flag_values_are_rejected():
    with pytest.raises(TypeError, match="status_bar"):
        compile_theme("#6200EE", "com.example.theme", "Sample", {"status_bar": "false"})


def test_false_flag_emits_no_component_entries():
    data = compile_theme("#6200EE", "com.example.theme", "Sample", {"status_bar": False})
    with _open(data) as archive:
        light = archive.read(LIGHT_COLORS_PATH).decode("utf-8")
    assert "system_status_bar_color" not in light
