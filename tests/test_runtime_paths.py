from __future__ import annotations

from accentforge import runtime_paths


def test_package_root_points_to_repo_package() -> None:
    root = runtime_paths.package_root()
    assert root.name == "accentforge"
    assert (root / "themes").exists()


def test_builtin_recipes_root_resolves() -> None:
    root = runtime_paths.builtin_recipes_root()
    assert root.name == "builtin"
    assert root.parent.name == "themes"
    assert any(root.glob("*.yaml"))
