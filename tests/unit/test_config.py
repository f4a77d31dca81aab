"""Tests for compiler configuration loading."""

from pathlib import Path

import pytest

from litespec.core.config import CompilerOptions, find_config, load_options
from litespec.core.errors import ConfigError


class TestLoadOptions:
    def test_defaults(self) -> None:
        options = load_options(None)
        assert options == CompilerOptions()
        assert options.default_coercion == "typed"
        assert options.require_condition_properties is False

    def test_litespec_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "litespec.toml"
        path.write_text('default_coercion = "legacy"\nrequire_condition_properties = true\n')
        options = load_options(path)
        assert options.default_coercion == "legacy"
        assert options.require_condition_properties is True

    def test_pyproject_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.litespec]\ndefault_coercion = "legacy"\n')
        assert load_options(path).default_coercion == "legacy"

    def test_pyproject_without_table_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_options(path) == CompilerOptions()

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "litespec.toml"
        path.write_text('default_coercion = "sometimes"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_options(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "litespec.toml"
        path.write_text("strict = true\n")
        with pytest.raises(ConfigError):
            load_options(path)

    def test_broken_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "litespec.toml"
        path.write_text("default_coercion = \n")
        with pytest.raises(ConfigError, match="Cannot read configuration"):
            load_options(path)


class TestFindConfig:
    def test_prefers_litespec_toml(self, tmp_path: Path) -> None:
        (tmp_path / "litespec.toml").write_text("")
        (tmp_path / "pyproject.toml").write_text("[tool.litespec]\n")
        assert find_config(tmp_path) == tmp_path / "litespec.toml"

    def test_pyproject_with_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.litespec]\n")
        spec = tmp_path / "model.ls"
        spec.write_text("")
        assert find_config(spec) == tmp_path / "pyproject.toml"

    def test_pyproject_without_table_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config(tmp_path) is None

    def test_nothing_found(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None
