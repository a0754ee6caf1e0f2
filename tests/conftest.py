"""Pytest configuration and fixtures."""

import gc
import shutil
import tempfile
import time
from collections.abc import Generator
from pathlib import Path

import pytest

from memzip.bootstrap import ApplicationContainer, bootstrap_application
from memzip.config import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Force garbage collection to release any file handles
        gc.collect()
        # Small delay to allow OS to release file locks
        time.sleep(0.1)
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_files(temp_dir: Path) -> list[Path]:
    """Create multiple sample files."""
    files = []

    txt_file = temp_dir / "document1.txt"
    txt_file.write_text("First sample document.")
    files.append(txt_file)

    txt_file2 = temp_dir / "document2.txt"
    txt_file2.write_text("Second sample document with different content.")
    files.append(txt_file2)

    bin_file = temp_dir / "payload.bin"
    bin_file.write_bytes(bytes(range(256)) * 16)
    files.append(bin_file)

    return files


@pytest.fixture
def shallow_tree(temp_dir: Path) -> Path:
    """Directory ``D`` with ``a.txt`` and ``sub/b.txt``."""
    root = temp_dir / "D"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "sub" / "b.txt").write_text("bravo")
    return root


@pytest.fixture
def nested_tree(temp_dir: Path) -> Path:
    """Directory ``D`` with ``a.txt``, ``s1/b.txt`` and ``s1/s2/c.txt``."""
    root = temp_dir / "D"
    (root / "s1" / "s2").mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "s1" / "b.txt").write_text("bravo")
    (root / "s1" / "s2" / "c.txt").write_text("charlie")
    return root


@pytest.fixture
def override_settings() -> Generator[Settings, None, None]:
    """Provide isolated memzip settings scoped to tests."""

    import memzip.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(_env_file=None)
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


@pytest.fixture
def container(override_settings: Settings) -> ApplicationContainer:
    """Application container wired with default adapters."""
    return bootstrap_application(settings=override_settings)
