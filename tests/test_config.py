from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from depflat.config import (
    DepFlatConfig,
    _parse_section,
    _pyproject_has_depflat_section,
    _read_toml,
    discover_config_file,
    load_config,
)
from depflat.exceptions import ConfigError


@pytest.mark.unit
class TestDepFlatConfig:
    def test_defaults(self) -> None:
        config = DepFlatConfig()

        assert config.manifest_type == "auto"
        assert config.include_dev is True
        assert config.max_depth == 64
        assert config.command_timeout is None
        assert config.source_path is None

    def test_to_log_dict_excludes_source_path(self) -> None:
        config = DepFlatConfig(source_path=Path("/x/depflat.toml"))

        assert "source_path" not in config.to_log_dict()
        assert config.to_log_dict()["manifest_type"] == "auto"


@pytest.mark.unit
class TestDiscoverConfigFile:
    def test_explicit_path(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[depflat]\n", encoding="utf-8")

        assert discover_config_file(config_file) == config_file.resolve()

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            discover_config_file(tmp_path / "missing.toml")

    def test_depflat_toml_before_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "depflat.toml").write_text("[depflat]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.depflat]\n", encoding="utf-8")

        with patch("depflat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == tmp_path / "depflat.toml"

    def test_pyproject_with_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            "[tool.depflat]\ninclude_dev = false\n", encoding="utf-8"
        )

        with patch("depflat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == tmp_path / "pyproject.toml"

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.other]\n", encoding="utf-8")

        with patch("depflat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None


@pytest.mark.unit
class TestPyprojectHasDepflatSection:
    def test_invalid_toml_is_treated_as_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.depflat\n", encoding="utf-8")

        assert _pyproject_has_depflat_section(path) is False


@pytest.mark.unit
class TestLoadConfig:
    def test_defaults_when_nothing_found(self, tmp_path: Path) -> None:
        with patch("depflat.config.Path.cwd", return_value=tmp_path):
            assert load_config() == DepFlatConfig()

    def test_loads_depflat_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "depflat.toml"
        path.write_text(
            "[depflat]\n"
            'manifest_type = "yarn.lock"\n'
            "include_dev = false\n"
            "max_depth = 8\n"
            "command_timeout = 90\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.manifest_type == "yarn.lock"
        assert config.include_dev is False
        assert config.max_depth == 8
        assert config.command_timeout == 90.0
        assert config.source_path == path.resolve()

    def test_loads_pyproject_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.depflat]\nmax_depth = 4\n", encoding="utf-8")

        assert load_config(path).max_depth == 4

    def test_empty_section_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "depflat.toml"
        path.write_text("[other]\nkey = 1\n", encoding="utf-8")

        config = load_config(path)

        assert config.max_depth == 64
        assert config.source_path == path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "depflat.toml"
        path.write_text("not = [valid", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _read_toml(path)


@pytest.mark.unit
class TestParseSection:
    def test_unknown_keys(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration keys"):
            _parse_section({"colour": True}, config_path="x")

    @pytest.mark.parametrize(
        "section,option",
        [
            ({"manifest_type": "pnpm-lock.yaml"}, "manifest_type"),
            ({"manifest_type": 1}, "manifest_type"),
            ({"include_dev": "yes"}, "include_dev"),
            ({"max_depth": 0}, "max_depth"),
            ({"max_depth": True}, "max_depth"),
            ({"max_depth": 2.5}, "max_depth"),
            ({"command_timeout": -1}, "command_timeout"),
            ({"command_timeout": "60"}, "command_timeout"),
        ],
    )
    def test_invalid_values(self, section, option: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse_section(section, config_path="depflat.toml")

        assert exc_info.value.option == option

    def test_auto_manifest_type_is_accepted(self) -> None:
        config = _parse_section({"manifest_type": "auto"}, config_path="x")

        assert config.manifest_type == "auto"
