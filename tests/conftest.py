"""Shared fixtures for EKS template verification tests."""

import shutil
from pathlib import Path

import pytest

FIXTURE_TEMPLATE = Path(__file__).parent / "fixtures" / "eks-template"


@pytest.fixture(scope="session")
def template_root() -> Path:
    """The pristine fixture template. Never modify it."""
    return FIXTURE_TEMPLATE


@pytest.fixture
def template_copy(tmp_path) -> Path:
    """A writable copy of the fixture template for negative cases."""
    destination = tmp_path / "eks-template"
    shutil.copytree(FIXTURE_TEMPLATE, destination)
    return destination


@pytest.fixture
def rewrite():
    """Replace text in a file, failing loudly if the text is not there."""

    def _rewrite(path: Path, old: str, new: str) -> None:
        content = path.read_text(encoding="utf-8")
        assert old in content, f"{old!r} not found in {path}"
        path.write_text(content.replace(old, new), encoding="utf-8")

    return _rewrite
