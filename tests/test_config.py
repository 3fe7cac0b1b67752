"""
Tests for config.py.
"""

import logging
from pathlib import Path

from todo_md.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    FormatSettings,
    PathSettings,
    Settings,
    config_file_path,
    load_config,
    render_config,
    write_config,
)
from todo_md.dialect import LOGSEQ, MARKDOWN


class TestDefaults:
    def test_values(self):
        settings = Settings()
        assert settings.path.todo_path == Path.home()
        assert settings.path.todo_filename == "todo.md"
        assert settings.format.checkbox_style == "md"
        assert settings.todo_file == Path.home() / "todo.md"
        assert settings.dialect is MARKDOWN


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "config.toml") == Settings()

    def test_valid(self, tmp_path):
        cfg = tmp_path / "config.toml"
        cfg.write_text(
            '[path]\n'
            f'todo_path = "{(tmp_path / "notes").as_posix()}"\n'
            'todo_filename = "tasks.md"\n'
            '\n'
            '[format]\n'
            'checkbox_style = "logseq"\n',
            encoding="utf-8",
        )
        settings = load_config(cfg)
        assert settings.todo_file == tmp_path / "notes" / "tasks.md"
        assert settings.dialect is LOGSEQ

    def test_partial_uses_defaults_for_rest(self, tmp_path):
        cfg = tmp_path / "config.toml"
        cfg.write_text('[format]\ncheckbox_style = "logseq"\n', encoding="utf-8")
        settings = load_config(cfg)
        assert settings.path.todo_filename == "todo.md"
        assert settings.format.checkbox_style == "logseq"

    def test_broken_toml(self, tmp_path, caplog):
        cfg = tmp_path / "config.toml"
        cfg.write_text("[path\nthis is not toml", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_config(cfg) == Settings()
        assert "error in your config" in caplog.text
        assert "using the following defaults" in caplog.text

    def test_not_utf8(self, tmp_path, caplog):
        cfg = tmp_path / "config.toml"
        cfg.write_bytes(b'[path]\ntodo_filename = "caf\xe9.md"\n')
        with caplog.at_level(logging.WARNING):
            assert load_config(cfg) == Settings()
        assert "error in your config" in caplog.text
        assert "using the following defaults" in caplog.text

    def test_schema_error(self, tmp_path, caplog):
        cfg = tmp_path / "config.toml"
        cfg.write_text('[format]\ncheckbox_style = ["md"]\n', encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_config(cfg) == Settings()
        assert "error in your config" in caplog.text

    def test_unknown_style_falls_back_on_use(self, tmp_path, caplog):
        cfg = tmp_path / "config.toml"
        cfg.write_text('[format]\ncheckbox_style = "org"\n', encoding="utf-8")
        settings = load_config(cfg)
        assert settings.format.checkbox_style == "org"
        with caplog.at_level(logging.WARNING):
            assert settings.dialect is MARKDOWN
        assert "invalid format" in caplog.text

    def test_tilde_expanded(self, tmp_path):
        cfg = tmp_path / "config.toml"
        cfg.write_text('[path]\ntodo_path = "~/notes"\n', encoding="utf-8")
        assert load_config(cfg).todo_file == Path.home() / "notes" / "todo.md"


class TestWriteConfig:
    def test_round_trip(self, tmp_path):
        cfg = tmp_path / "nested" / "dir" / "config.toml"
        settings = Settings(
            path=PathSettings(todo_path=tmp_path / "notes", todo_filename="my \"tasks\".md"),
            format=FormatSettings(checkbox_style="logseq"),
        )
        write_config(cfg, settings)
        assert cfg.exists()
        assert load_config(cfg) == settings

    def test_render(self):
        text = render_config(Settings(path=PathSettings(todo_path=Path("/srv/notes"))))
        assert '[path]' in text
        assert 'todo_path = "/srv/notes"' in text
        assert 'todo_filename = "todo.md"' in text
        assert 'checkbox_style = "md"' in text


class TestConfigFilePath:
    def test_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
        assert config_file_path(str(tmp_path / "cli.toml")) == tmp_path / "cli.toml"

    def test_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
        assert config_file_path() == tmp_path / "env.toml"

    def test_default(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_file_path() == DEFAULT_CONFIG_FILE
