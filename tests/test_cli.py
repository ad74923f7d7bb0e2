"""Tests for the i18n-build command line."""

import json

import pytest
from click.testing import CliRunner

from i18nbuild.cli import DEFAULT_CONFIG, cli, load_config


@pytest.fixture
def config_folder(tmp_path):
    folder = tmp_path / "config"
    folder.mkdir()
    (folder / "config.yml").write_text(
        "logging:\n"
        "  level: DEBUG\n"
        "build:\n"
        "  interface_name: ConfiguredI18n\n",
        encoding="utf8",
    )
    return folder


class TestLoadConfig:
    """Tests for load_config()."""

    def test_overrides_defaults(self, config_folder):
        """Values from config.yml replace the defaults section by section."""
        config = load_config(str(config_folder))
        assert config["logging"]["level"] == "DEBUG"
        assert config["logging"]["datefmt"] == DEFAULT_CONFIG["logging"]["datefmt"]
        assert config["build"]["interface_name"] == "ConfiguredI18n"
        assert config["build"]["default_locale"] == "en"

    def test_missing_file_uses_defaults(self, tmp_path):
        """A missing config file falls back to the defaults."""
        assert load_config(str(tmp_path / "nowhere")) == DEFAULT_CONFIG

    def test_non_mapping_config_exits(self, tmp_path):
        """A config.yml that is not a mapping stops the program."""
        (tmp_path / "config.yml").write_text("- logging\n- build\n", encoding="utf8")
        with pytest.raises(SystemExit):
            load_config(str(tmp_path))

    def test_invalid_yaml_exits(self, tmp_path):
        """Malformed YAML stops the program."""
        (tmp_path / "config.yml").write_text("logging: [", encoding="utf8")
        with pytest.raises(SystemExit):
            load_config(str(tmp_path))


class TestCommands:
    """Tests for the build, build-locales and check commands."""

    def test_build(self, tmp_path, config_folder):
        """build writes the catalog and the declaration."""
        source = tmp_path / "en.yml"
        source.write_text("hello: Hello\n", encoding="utf8")
        catalog = tmp_path / "messages.json"
        declaration = tmp_path / "i18n.d.ts"

        result = CliRunner().invoke(
            cli,
            [
                "--config-folder",
                str(config_folder),
                "build",
                str(source),
                "--catalog-out",
                str(catalog),
                "--declaration-out",
                str(declaration),
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(catalog.read_text("utf8")) == {"hello": {"message": "Hello"}}
        assert declaration.read_text("utf8").startswith("interface ConfiguredI18n {")

    def test_build_interface_name_option(self, tmp_path, config_folder):
        """Command line options win over config.yml."""
        source = tmp_path / "en.toml"
        source.write_text('hello = "Hello"\n', encoding="utf8")
        declaration = tmp_path / "i18n.d.ts"

        result = CliRunner().invoke(
            cli,
            [
                "--config-folder",
                str(config_folder),
                "build",
                str(source),
                "--catalog-out",
                str(tmp_path / "messages.json"),
                "--declaration-out",
                str(declaration),
                "--interface-name",
                "Other",
                "--substitution-type",
                "string",
            ],
        )

        assert result.exit_code == 0, result.output
        text = declaration.read_text("utf8")
        assert text.startswith("interface Other {")
        assert 'sub?: string[]' in text

    def test_build_failure_exits_1(self, tmp_path, config_folder):
        """A broken source exits with status 1 and writes nothing."""
        source = tmp_path / "en.json"
        source.write_text("{broken", encoding="utf8")
        catalog = tmp_path / "messages.json"

        result = CliRunner().invoke(
            cli,
            [
                "--config-folder",
                str(config_folder),
                "build",
                str(source),
                "--catalog-out",
                str(catalog),
                "--declaration-out",
                str(tmp_path / "i18n.d.ts"),
            ],
        )

        assert result.exit_code == 1
        assert not catalog.exists()

    def test_build_undecodable_source_exits_1(self, tmp_path, config_folder):
        """Bytes that are not UTF-8 are logged and exit 1, not a traceback."""
        source = tmp_path / "en.json"
        source.write_bytes(b'{"a": "\xff"}')

        result = CliRunner().invoke(
            cli,
            [
                "--config-folder",
                str(config_folder),
                "build",
                str(source),
                "--catalog-out",
                str(tmp_path / "messages.json"),
                "--declaration-out",
                str(tmp_path / "i18n.d.ts"),
            ],
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_build_locales(self, tmp_path, config_folder, locales_dir):
        """build-locales writes one catalog per locale."""
        out_dir = tmp_path / "dist"
        result = CliRunner().invoke(
            cli,
            [
                "--config-folder",
                str(config_folder),
                "build-locales",
                str(locales_dir),
                "--out-dir",
                str(out_dir),
                "--declaration-out",
                str(tmp_path / "i18n.d.ts"),
            ],
        )

        assert result.exit_code == 0, result.output
        for locale in ("de", "en", "fr"):
            assert (out_dir / "_locales" / locale / "messages.json").is_file()
        assert (tmp_path / "i18n.d.ts").is_file()

    def test_check_reports_issues(self, tmp_path, config_folder, locales_dir):
        """check writes a markdown report and exits 1 when issues exist."""
        report = tmp_path / "report.md"
        result = CliRunner().invoke(
            cli,
            [
                "--config-folder",
                str(config_folder),
                "check",
                str(locales_dir),
                "--report",
                str(report),
            ],
        )

        assert result.exit_code == 1
        text = report.read_text("utf8")
        assert text.startswith("## fr\n")
        assert "| `bye` | Message missing |" in text

    def test_check_clean_locales(self, tmp_path, config_folder, locales_dir):
        """check prints the report and exits 0 when locales match."""
        (locales_dir / "fr.toml").unlink()
        result = CliRunner().invoke(
            cli,
            ["--config-folder", str(config_folder), "check", str(locales_dir)],
        )

        assert result.exit_code == 0, result.output
        assert "No issues found" in result.output
