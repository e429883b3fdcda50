"""File locator module.

Resolves logical names (modules, environments, repository files) to paths
inside the template repository. Nothing is cached; every call recomputes.
"""

from pathlib import Path

from shared.constants import ENVIRONMENTS, KNOWN_SUBDIRS, LIVE_DIR, MARKER_DIRS, MODULES_DIR


def find_project_root(start: str | Path | None = None) -> Path:
    """Find the template repository root.

    Leading test subdirectories (unit/, property/, test/) are stripped first,
    unless they hold the markers themselves. Then the tree is walked upwards until a directory holding every marker
    directory (live/ and modules/) is found.

    Args:
        start: Directory to start from (default: current directory)

    Returns:
        The first ancestor with all marker directories, or the stripped start
        directory if none has them
    """
    current = Path(start).resolve() if start is not None else Path.cwd()

    while (
        current.name in KNOWN_SUBDIRS
        and current.parent != current
        and not _has_markers(current)
    ):
        current = current.parent

    for candidate in [current, *current.parents]:
        if _has_markers(candidate):
            return candidate

    return current


def _has_markers(directory: Path) -> bool:
    return all((directory / marker).is_dir() for marker in MARKER_DIRS)


def _resolve_root(root: str | Path | None) -> Path:
    return Path(root).resolve() if root is not None else find_project_root()


def module_path(module_name: str, root: str | Path | None = None) -> Path:
    """Get the directory of a module (e.g., "clusters/eks")."""
    return _resolve_root(root) / MODULES_DIR / module_name


def module_file(module_name: str, filename: str, root: str | Path | None = None) -> Path:
    """Get a file inside a module directory."""
    return module_path(module_name, root) / filename


def environment_path(environment: str, root: str | Path | None = None) -> Path:
    """Get the directory of a deployment environment.

    Raises:
        ValueError: If the environment is not one of ENVIRONMENTS
    """
    if environment not in ENVIRONMENTS:
        raise ValueError(
            f"Unknown environment '{environment}'. Expected one of: {', '.join(ENVIRONMENTS)}"
        )
    return _resolve_root(root).joinpath(*LIVE_DIR, environment)


def environment_file(environment: str, filename: str, root: str | Path | None = None) -> Path:
    """Get a file inside an environment directory."""
    return environment_path(environment, root) / filename


def repository_path(relative: str, root: str | Path | None = None) -> Path:
    """Get a path relative to the repository root (e.g., "docs/troubleshooting.md")."""
    return _resolve_root(root) / relative


def locate(path: str | Path) -> Path | None:
    """Return the path if it exists, otherwise None."""
    path = Path(path)
    return path if path.exists() else None


def file_exists(path: str | Path) -> bool:
    return Path(path).is_file()


def directory_exists(path: str | Path) -> bool:
    return Path(path).is_dir()
