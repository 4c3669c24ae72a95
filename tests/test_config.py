from pathlib import Path

import pytest

from lessonpath.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.catalog_path == Path("data") / "learningModules.json"
    assert settings.completed_path is None
    assert settings.strict_catalog is False
    assert settings.log_level == "INFO"
    assert settings.environment == "development"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LESSONPATH_CATALOG_PATH", "/srv/catalog.json")
    monkeypatch.setenv("LESSONPATH_STRICT_CATALOG", "true")
    monkeypatch.setenv("lessonpath_environment", "production")
    settings = get_settings()
    assert settings.catalog_path == Path("/srv/catalog.json")
    assert settings.strict_catalog is True
    assert settings.environment == "production"
    assert get_settings() is settings


def test_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LESSONPATH_LOG_LEVEL=DEBUG\nLESSONPATH_COMPLETED_PATH=progress.json\n", encoding="utf-8")
    settings = Settings(_env_file=env_file)
    assert settings.log_level == "DEBUG"
    assert settings.completed_path == Path("progress.json")
