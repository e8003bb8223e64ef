"""Filesystem traversal shared by every detector."""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset({
    "node_modules", ".git", "dist", "build", "__pycache__", ".next", "vendor",
    ".venv", "venv", ".tox", ".eggs",
})

# Lock files and minified bundles are noise for line-based rules.
SKIP_SUFFIXES = (".min.js", ".lock", "yarn.lock", "package-lock.json")

ENV_PREFIX = ".env"

FileFilter = Callable[[Path], bool]


def _skip_unreadable(error: OSError) -> None:
    logger.debug("Skipping unreadable directory %s: %s", error.filename, error.strerror)


def walk_files(
    root: Path,
    accept: FileFilter | None = None,
    skip_dirs: Iterable[str] = SKIP_DIRS,
) -> Iterator[Path]:
    """Yield regular files under ``root`` in a stable order.

    The walk is top-down: a directory's own files, sorted by name, come before
    its subdirectories, which are visited in sorted order. Deny-listed
    directory names are pruned at any depth. Broken symlinks, unreadable
    directories and files that cannot be stat'ed are skipped. Every call walks
    the tree again.
    """
    skip = frozenset(skip_dirs)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_skip_unreadable):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for fname in sorted(filenames):
            filepath = Path(dirpath) / fname
            try:
                if not filepath.is_file():
                    continue
            except OSError as exc:
                logger.debug("Skipping unreadable file %s: %s", filepath, exc)
                continue
            if accept is not None and not accept(filepath):
                continue
            yield filepath


def count_files(root: Path, skip_dirs: Iterable[str] = SKIP_DIRS) -> int:
    return sum(1 for _ in walk_files(root, skip_dirs=skip_dirs))


def read_lines(filepath: Path) -> list[str] | None:
    """Return the lines of a text file, or None if it cannot be read."""
    try:
        content = filepath.read_text(encoding="utf-8", errors="ignore")
    except OSError as exc:
        logger.debug("Skipping unreadable file %s: %s", filepath, exc)
        return None
    return content.splitlines()


def relative_path(filepath: Path, root: Path) -> str:
    return filepath.relative_to(root).as_posix()


def extension_filter(
    extensions: Iterable[str],
    env_files: bool = False,
    skip_suffixes: Iterable[str] = (),
) -> FileFilter:
    """Build a filter accepting files by extension.

    With ``env_files`` set, any file whose name starts with ``.env`` is accepted
    too (``.env``, ``.env.local``...), since those have no usable extension.
    """
    allowed = frozenset(extensions)
    suffixes = tuple(skip_suffixes)

    def _accept(filepath: Path) -> bool:
        name = filepath.name
        if suffixes and name.endswith(suffixes):
            return False
        if env_files and name.startswith(ENV_PREFIX):
            return True
        return filepath.suffix in allowed

    return _accept


def filename_filter(names: Iterable[str]) -> FileFilter:
    wanted = frozenset(names)
    return lambda filepath: filepath.name in wanted
