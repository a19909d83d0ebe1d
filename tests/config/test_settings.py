"""Tests for ValgenSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from valgen.config.settings import ValgenSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("VALGEN_CONFIG", "VALGEN_QUIET", "VALGEN_GENERATE__LOCALE"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ValgenSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.generate.locale == "en"
        assert settings.generate.tag_key == "rules"
        assert settings.messages.catalog is None
        assert settings.catalog_path is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ValgenSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "valgen.toml").write_text('[generate]\nlocale = "es"\n')
        settings = ValgenSettings.from_cli(project_root=tmp_path)
        assert settings.generate.locale == "es"
        assert settings.generate.output_suffix == "_schema.py"  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[generate]\ntag_key = "check"\n')
        settings = ValgenSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.generate.tag_key == "check"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "valgen.toml").write_text("[generate\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ValgenSettings.from_cli(project_root=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / "valgen.toml").write_text('[generate]\noutput_suffix = "_schema.txt"\n')
        with pytest.raises(click.ClickException) as exc_info:
            ValgenSettings.from_cli(project_root=tmp_path)
        assert "Invalid configuration in" in exc_info.value.message
        assert "generate.output_suffix" in exc_info.value.message

    def test_pyproject_tool_table(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "app"\n\n[tool.valgen.generate]\ntag_key = "validate"\n'
        )
        monkeypatch.chdir(tmp_path)
        settings = ValgenSettings.from_cli()
        assert settings.generate.tag_key == "validate"
        assert settings.config_path == (tmp_path / "pyproject.toml").resolve()
        assert settings.project_root == tmp_path.resolve()


class TestProjectRoot:
    def test_root_from_toml_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "valgen.toml").write_text("")
        subdir = tmp_path / "sub" / "deep"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)
        settings = ValgenSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()

    def test_relative_catalog_resolves_against_root(self, tmp_path: Path) -> None:
        (tmp_path / "valgen.toml").write_text('[messages]\ncatalog = "locales/messages.json"\n')
        settings = ValgenSettings.from_cli(project_root=tmp_path)
        assert settings.catalog_path == tmp_path / "locales" / "messages.json"

    def test_absolute_catalog(self, tmp_path: Path) -> None:
        target = tmp_path / "abs.json"
        (tmp_path / "valgen.toml").write_text(f'[messages]\ncatalog = "{target.as_posix()}"\n')
        settings = ValgenSettings.from_cli(project_root=tmp_path / "elsewhere")
        assert settings.catalog_path == target


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ValgenSettings.from_cli(
            project_root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "valgen.toml").write_text("quiet = true\n")
        settings = ValgenSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VALGEN_QUIET", "true")
        settings = ValgenSettings.from_cli(project_root=tmp_path)
        assert settings.quiet is True

    def test_nested_env_var_beats_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "valgen.toml").write_text('[generate]\nlocale = "es"\n')
        monkeypatch.setenv("VALGEN_GENERATE__LOCALE", "en")
        settings = ValgenSettings.from_cli(project_root=tmp_path)
        assert settings.generate.locale == "en"
