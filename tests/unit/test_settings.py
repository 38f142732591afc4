"""
Unit tests for settings loading: defaults, TOML discovery, environment
overrides and error reporting.
"""

from pathlib import Path

import pytest

from relmap.core.exceptions import ConfigFileError, ConfigValidationError
from relmap.core.settings import find_config_file, load_settings


def write_config(directory: Path, content: str) -> Path:
    config_dir = directory / ".relmap"
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "config.toml"
    path.write_text(content)
    return path


class TestDefaults:
    """Settings without any config file."""

    def test_convention_defaults(self):
        settings = load_settings()

        assert settings.conventions.id_column == "id"
        assert settings.conventions.models_package == "models"
        assert settings.conventions.timestamps is True
        assert settings.conventions.created_at_column == "createdAt"
        assert settings.conventions.updated_at_column == "updatedAt"

    def test_logging_defaults(self):
        settings = load_settings()

        assert settings.logging.level == "warning"
        assert settings.logging.console is False
        assert settings.logging.file is False

    def test_no_config_file(self):
        settings = load_settings()

        assert settings.config_file is None
        assert settings.config_error is None
        assert "_config_file" not in settings.to_dict()


class TestTomlFiles:
    """Config discovered from .relmap/config.toml and pyproject.toml."""

    def test_relmap_config_file(self, tmp_path):
        path = write_config(
            tmp_path,
            '[conventions]\nid_column = "key"\ntimestamps = false\n\n[logging]\nlevel = "debug"\n',
        )

        settings = load_settings()

        assert settings.conventions.id_column == "key"
        assert settings.conventions.timestamps is False
        assert settings.logging.level == "debug"
        assert settings.config_file == str(path)

    def test_found_from_subdirectory(self, tmp_path):
        write_config(tmp_path, '[conventions]\nmodels_package = "app.models"\n')
        nested = tmp_path / "src" / "app"
        nested.mkdir(parents=True)

        assert find_config_file(str(nested)) == tmp_path / ".relmap" / "config.toml"
        assert load_settings(start_dir=str(nested)).conventions.models_package == "app.models"

    def test_pyproject_tool_table(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "shop"\n\n[tool.relmap.conventions]\nid_column = "uuid"\n'
        )

        settings = load_settings()

        assert settings.conventions.id_column == "uuid"
        assert settings.config_file == str(tmp_path / "pyproject.toml")

    def test_pyproject_without_tool_table_ignored(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "shop"\n')

        assert find_config_file(str(tmp_path)) is None

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[conventions]\nupdated_at_column = "modified"\n')

        settings = load_settings(config_path=path)

        assert settings.conventions.updated_at_column == "modified"
        assert settings.config_file == str(path)

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(ConfigFileError) as exc_info:
            load_settings(config_path=tmp_path / "missing.toml")

        assert exc_info.value.context["file_path"] == str(tmp_path / "missing.toml")

    def test_malformed_toml_reported_not_raised(self, tmp_path):
        write_config(tmp_path, "[conventions\nid_column = ")

        settings = load_settings()

        assert settings.conventions.id_column == "id"
        assert settings.config_error is not None
        assert "Failed to parse config file" in settings.config_error

    def test_unknown_keys_ignored(self, tmp_path):
        write_config(tmp_path, '[conventions]\nflavor = "vanilla"\n\n[plugins]\nenabled = true\n')

        assert load_settings().conventions.id_column == "id"


class TestValidation:
    """Invalid configuration values."""

    def test_blank_convention_rejected(self, tmp_path):
        write_config(tmp_path, '[conventions]\nid_column = "  "\n')

        with pytest.raises(ConfigValidationError):
            load_settings()

    def test_unknown_log_level_rejected(self, tmp_path):
        write_config(tmp_path, '[logging]\nlevel = "verbose"\n')

        with pytest.raises(ConfigValidationError) as exc_info:
            load_settings()

        assert isinstance(exc_info.value, ValueError)

    def test_convention_values_trimmed(self, tmp_path):
        write_config(tmp_path, '[conventions]\nid_column = " pk "\n')

        assert load_settings().conventions.id_column == "pk"


class TestEnvironment:
    """RELMAP_* environment variables."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        write_config(tmp_path, '[conventions]\nid_column = "key"\nmodels_package = "app.models"\n')
        monkeypatch.setenv("RELMAP_CONVENTIONS__ID_COLUMN", "pk")

        settings = load_settings()

        assert settings.conventions.id_column == "pk"
        assert settings.conventions.models_package == "app.models"

    def test_env_bool(self, monkeypatch):
        monkeypatch.setenv("RELMAP_CONVENTIONS__TIMESTAMPS", "false")

        assert load_settings().conventions.timestamps is False


class TestAccessors:
    """Dot-notation access."""

    def test_get(self):
        settings = load_settings()

        assert settings.get("conventions.id_column") == "id"
        assert settings.get("logging.level") == "warning"

    def test_get_missing(self):
        settings = load_settings()

        assert settings.get("conventions.flavor") is None
        assert settings.get("nope.at.all", "fallback") == "fallback"

    def test_to_dict_sections(self):
        data = load_settings().to_dict()

        assert set(data) == {"conventions", "logging"}
        assert data["conventions"]["models_package"] == "models"
