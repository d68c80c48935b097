"""Overlay package constants."""

from __future__ import annotations

DEFAULT_THEME_NAME = "Custom Theme"
DEFAULT_PACKAGE_PREFIX = "com.accentforge.theme"
RECIPE_SCHEMA_VERSION = "1"

MANIFEST_PATH = "AndroidManifest.xml"
LIGHT_COLORS_PATH = "res/values/colors.xml"
NIGHT_COLORS_PATH = "res/values-night/colors.xml"
DYNAMIC_COLORS_PATH = "res/values-v31/colors.xml"
OVERLAY_CONFIG_PATH = "assets/overlays/config.xml"

ARCHIVE_LAYOUT: tuple[str, ...] = (
    MANIFEST_PATH,
    LIGHT_COLORS_PATH,
    NIGHT_COLORS_PATH,
    DYNAMIC_COLORS_PATH,
    OVERLAY_CONFIG_PATH,
)

STATUS_BAR = "status_bar"
NAVIGATION_BAR = "navigation_bar"
SYSTEM_UI = "system_ui"
SETTINGS = "settings"
LAUNCHER = "launcher"

COMPONENT_NAMES: tuple[str, ...] = (
    STATUS_BAR,
    NAVIGATION_BAR,
    SYSTEM_UI,
    SETTINGS,
    LAUNCHER,
)

ANDROID_NAMESPACE = "http://schemas.android.com/apk/res/android"
PLATFORM_PACKAGE = "android"
SYSTEM_UI_PACKAGE = "com.android.systemui"

# (target package, overlay category)
OVERLAY_TARGETS: tuple[tuple[str, str], ...] = (
    (PLATFORM_PACKAGE, "android.theme.customization.accent_color"),
    (SYSTEM_UI_PACKAGE, "android.theme.customization.status_bar"),
    (SYSTEM_UI_PACKAGE, "android.theme.customization.navigation_bar"),
)
OVERLAY_PRIORITY = 1

ALWAYS_ON_FEATURES: tuple[str, ...] = (
    "material_you_override",
    "high_contrast_injection",
    "dynamic_colors",
)

# Resource suffixes for the accent1 ramp, one per tone stop in ascending order.
ACCENT1_SUFFIXES: tuple[int, ...] = (0, 10, 50, 100, 200, 300, 400, 500, 600, 700, 800)

# (resource suffix, additive shift factor, lighter)
NEUTRAL1_SHIFTS: tuple[tuple[int, float, bool], ...] = (
    (0, 0.8, True),
    (10, 0.6, True),
    (50, 0.4, True),
    (100, 0.2, True),
    (200, 0.0, True),
    (300, 0.2, False),
    (400, 0.4, False),
    (500, 0.6, False),
    (600, 0.8, False),
    (700, 0.9, False),
    (800, 0.95, False),
    (900, 0.98, False),
    (1000, 1.0, False),
)
