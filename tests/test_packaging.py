"""
Tests for the setuptools package discovery settings in pyproject.toml.
"""

from __future__ import annotations

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _find_settings() -> dict:
    with PYPROJECT.open("rb") as f:
        data = tomllib.load(f)
    return data["tool"]["setuptools"]["packages"]["find"]


def test_package_find_uses_known_keys() -> None:
    """setuptools rejects unknown keys under packages.find."""
    find = _find_settings()
    assert set(find) <= {"where", "include", "exclude", "namespaces"}


def test_src_is_discovered_as_namespace_package() -> None:
    """src/ has no __init__.py, so namespace discovery must be on."""
    find = _find_settings()
    assert find["namespaces"] is True
    assert "src*" in find["include"]
    assert not (PYPROJECT.parent / "src" / "__init__.py").exists()
