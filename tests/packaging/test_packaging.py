"""Packaging correctness verification for dom-canvas.

Tests validate:
- Base install has no ImportError from the optional fetch extra
- py.typed marker ships with the package
- Pytest plugin entry point is registered
- Package metadata and public exports are correct

These tests inspect the current installation rather than building wheels or
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstallNoImportError:
    """Verify base install does not import the optional HTTP stack."""

    def test_import_dom_canvas(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import dom_canvas

        assert hasattr(dom_canvas, "InteractionController")
        assert hasattr(dom_canvas, "snapshot")
        assert hasattr(dom_canvas, "render_svg")

    def test_no_httpx_import_on_base(self):  # type: ignore[no-untyped-def]
        """Importing dom_canvas in a fresh interpreter leaves httpx unloaded."""
        code = "import sys, dom_canvas; print('httpx' in sys.modules, 'tenacity' in sys.modules)"
        result = subprocess.run(
            [sys.executable, "-c", code],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "False False"

    def test_render_basic(self):  # type: ignore[no-untyped-def]
        """render_html() works with the base dependencies only."""
        from dom_canvas import render_html

        assert "<svg" in render_html("<html><body></body></html>")


class TestPackageFiles:
    """Verify files that must ship with the package."""

    def test_py_typed_present(self):  # type: ignore[no-untyped-def]
        import dom_canvas

        marker = Path(dom_canvas.__file__).parent / "py.typed"
        assert marker.is_file(), f"py.typed not found next to {dom_canvas.__file__}"

    def test_subpackages_have_init(self):  # type: ignore[no-untyped-def]
        """Every subpackage has an __init__.py."""
        import dom_canvas

        package_dir = Path(dom_canvas.__file__).parent
        for sub in ("tree", "render", "integrations"):
            assert (package_dir / sub / "__init__.py").is_file()


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for dom-canvas."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")
        ours = [ep for ep in pytest11_eps if ep.value == "dom_canvas.integrations._pytest_plugin"]
        assert ours, (
            f"No pytest11 entry point found for dom-canvas. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixtures_available(self):  # type: ignore[no-untyped-def]
        import importlib

        mod = importlib.import_module("dom_canvas.integrations._pytest_plugin")
        assert callable(mod.assert_valid_snapshot)
        assert callable(mod.recording_surface)


class TestPackageMetadata:
    """Verify pyproject.toml metadata completeness."""

    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import dom_canvas

        assert dom_canvas.__version__ == "0.1.0"

    def test_distribution_version_matches(self):  # type: ignore[no-untyped-def]
        from importlib.metadata import version

        import dom_canvas

        assert version("dom-canvas") == dom_canvas.__version__

    def test_all_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented public API."""
        import dom_canvas

        expected = {
            "Document",
            "DocumentFetcher",
            "DocumentIndex",
            "Element",
            "InteractionController",
            "MutationBridge",
            "RecordingSurface",
            "RemoteDocumentLoader",
            "RenderConfig",
            "SnapshotNode",
            "SvgSurface",
            "TagCategory",
            "TreeBuilder",
            "TreeRenderer",
            "locate",
            "parse_html",
            "render",
            "render_html",
            "render_svg",
            "snapshot",
        }
        actual = set(dom_canvas.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )
