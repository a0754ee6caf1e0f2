"""Filesystem port implementation over :mod:`pathlib`."""

from __future__ import annotations

from memzip.app.ports import DirectoryHandle, FileHandle, FileSystemPort
from memzip.utils.paths import find_directories, find_files


class LocalFileSystemAdapter(FileSystemPort):
    """Adapter that queries the local filesystem directly.

    Symlinks to regular files are always listed. Symlinked directories are
    listed only when ``follow_symlinks`` is set.
    """

    def __init__(self, *, follow_symlinks: bool = False) -> None:
        self._follow_symlinks = follow_symlinks

    def exists(self, handle: FileHandle | DirectoryHandle) -> bool:
        if isinstance(handle, DirectoryHandle):
            return handle.path.is_dir()
        return handle.path.is_file()

    def list_files(self, directory: DirectoryHandle) -> list[FileHandle]:
        return self._files(directory, recursive=False)

    def list_directories(self, directory: DirectoryHandle) -> list[DirectoryHandle]:
        return self._directories(directory, recursive=False)

    def list_files_recursive(self, directory: DirectoryHandle) -> list[FileHandle]:
        return self._files(directory, recursive=True)

    def list_directories_recursive(self, directory: DirectoryHandle) -> list[DirectoryHandle]:
        return self._directories(directory, recursive=True)

    def _files(self, directory: DirectoryHandle, *, recursive: bool) -> list[FileHandle]:
        paths = find_files(directory.path, recursive=recursive)
        return [FileHandle(path=path) for path in paths]

    def _directories(
        self, directory: DirectoryHandle, *, recursive: bool
    ) -> list[DirectoryHandle]:
        paths = find_directories(
            directory.path, recursive=recursive, follow_symlinks=self._follow_symlinks
        )
        return [DirectoryHandle(path=path) for path in paths]
