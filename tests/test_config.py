import pytest
from pydantic import ValidationError

from memzip.app.ports import CompressionLevel, DirectoryHandle, TreeWalkMode
from memzip.bootstrap import bootstrap_application
from memzip.config import Settings, get_settings, set_settings


def test_defaults(monkeypatch):
    for name in ("COMPRESSION_LEVEL", "TREE_WALK_MODE", "TIMEOUT_SECONDS", "FOLLOW_SYMLINKS", "LOG_LEVEL"):
        monkeypatch.delenv(f"MEMZIP_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.compression_level is CompressionLevel.OPTIMAL
    assert settings.tree_walk_mode is TreeWalkMode.REPLICATE
    assert settings.timeout_seconds is None
    assert settings.follow_symlinks is False
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MEMZIP_COMPRESSION_LEVEL", "fastest")
    monkeypatch.setenv("MEMZIP_TREE_WALK_MODE", "hierarchical")
    monkeypatch.setenv("MEMZIP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("MEMZIP_LOG_LEVEL", "debug")
    monkeypatch.setenv("MEMZIP_FOLLOW_SYMLINKS", "true")

    settings = Settings(_env_file=None)

    assert settings.compression_level is CompressionLevel.FASTEST
    assert settings.tree_walk_mode is TreeWalkMode.HIERARCHICAL
    assert settings.timeout_seconds == 2.5
    assert settings.follow_symlinks is True
    assert settings.log_level == "DEBUG"


def test_env_file_is_read(tmp_path, monkeypatch):
    monkeypatch.delenv("MEMZIP_COMPRESSION_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("MEMZIP_COMPRESSION_LEVEL=smallest\n", encoding="utf-8")

    settings = Settings(_env_file=env_file)

    assert settings.compression_level is CompressionLevel.SMALLEST


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, compression_level="ultra")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, timeout_seconds=-1)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_set_settings_replaces_global(override_settings):
    replacement = Settings(_env_file=None, compression_level="none")

    set_settings(replacement)

    assert get_settings() is replacement


def test_bootstrap_uses_settings_defaults():
    settings = Settings(
        _env_file=None,
        compression_level="none",
        tree_walk_mode="hierarchical",
        timeout_seconds=30,
    )

    container = bootstrap_application(settings=settings)

    assert container.archive_service.default_level is CompressionLevel.NONE
    assert container.archive_service.default_mode is TreeWalkMode.HIERARCHICAL
    assert container.new_token().deadline is not None


def test_bootstrap_passes_follow_symlinks_to_filesystem(tmp_path):
    root = tmp_path / "root"
    (tmp_path / "elsewhere").mkdir()
    root.mkdir()
    (root / "linked").symlink_to(tmp_path / "elsewhere", target_is_directory=True)

    following = bootstrap_application(settings=Settings(_env_file=None, follow_symlinks=True))
    default = bootstrap_application(settings=Settings(_env_file=None))

    handle = DirectoryHandle(path=root)
    assert [d.name for d in following.filesystem_port.list_directories(handle)] == ["linked"]
    assert default.filesystem_port.list_directories(handle) == []
