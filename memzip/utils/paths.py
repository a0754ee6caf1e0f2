"""Path utilities for directory enumeration and archive entry names."""

from __future__ import annotations

from pathlib import Path


def join_entry_path(*segments: str) -> str:
    """Join archive path segments with ``/``, dropping empty segments.

    >>> join_entry_path("", "docs", "a.txt")
    'docs/a.txt'
    >>> join_entry_path("root/docs", "sub", "b.txt")
    'root/docs/sub/b.txt'
    """
    return "/".join(segment.strip("/") for segment in segments if segment and segment.strip("/"))


def find_files(
    root: Path,
    pattern: str = "*",
    recursive: bool = True,
) -> list[Path]:
    """Find files matching pattern in directory.

    Symlinks to regular files are included. The recursive glob never descends
    through symlinked directories.
    """
    if not root.is_dir():
        return []

    if recursive:
        matches = root.rglob(pattern)
    else:
        matches = root.glob(pattern)

    files = []
    for path in matches:
        if path.is_file():
            files.append(path)

    return sorted(files)


def find_directories(
    root: Path,
    recursive: bool = True,
    follow_symlinks: bool = False,
) -> list[Path]:
    """Find subdirectories of ``root``, excluding ``root`` itself.

    Symlinked directories are skipped unless ``follow_symlinks`` is set. Even
    then, a link that points at ``root`` or one of its ancestors is skipped so
    a walk over the result terminates.
    """
    if not root.is_dir():
        return []

    matches = root.rglob("*") if recursive else root.glob("*")
    resolved_root = root.resolve()

    directories = []
    for path in matches:
        if not path.is_dir():
            continue

        if path.is_symlink():
            if not follow_symlinks:
                continue
            if resolved_root.is_relative_to(path.resolve()):
                continue

        directories.append(path)

    return sorted(directories)
