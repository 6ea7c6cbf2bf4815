"""Tests for dupefinder.config — configuration loading, merging, and interactive creation."""

from __future__ import annotations

from dupefinder.config import CONFIG_FILENAME
from dupefinder.config import create_config_interactive
from dupefinder.config import load_config
from dupefinder.config import merge_config_into_args

import argparse
import logging


class TestLoadConfig:
    """Test loading config.toml."""

    def test_returns_empty_dict_when_no_file(self, tmp_path):
        assert load_config(tmp_path) == {}

    def test_loads_valid_toml(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("recursive = true\nworkers = 4\n")
        cfg = load_config(tmp_path)
        assert cfg["recursive"] is True
        assert cfg["workers"] == 4

    def test_returns_empty_dict_on_parse_error(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILENAME).write_text("this is not valid toml [[[")
        with caplog.at_level(logging.WARNING, logger="dupefinder"):
            assert load_config(tmp_path) == {}
        assert "ignoring unreadable config" in caplog.text

    def test_uses_default_config_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        config_dir = tmp_path / "dupefinder"
        config_dir.mkdir()
        (config_dir / CONFIG_FILENAME).write_text("skip_empty = true\n")
        assert load_config()["skip_empty"] is True

    def test_missing_default_dir_not_created(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert load_config() == {}
        assert not (tmp_path / "dupefinder").exists()


class TestMergeConfigIntoArgs:
    """Test merging config into argparse Namespace."""

    def _make_args(self, **kwargs):
        defaults = {
            "recursive": None,
            "skip_empty": None,
            "progress": None,
            "workers": None,
        }
        defaults.update(kwargs)
        return argparse.Namespace(**defaults)

    def test_hardcoded_defaults(self):
        args = self._make_args()
        merge_config_into_args(args, {})
        assert args.recursive is False
        assert args.skip_empty is False
        assert args.progress is True
        assert args.workers == 1
        assert args.chunk_size == 64 * 1024

    def test_config_overrides_defaults(self):
        args = self._make_args()
        merge_config_into_args(args, {"recursive": True, "workers": 8, "chunk_size": 4096})
        assert args.recursive is True
        assert args.workers == 8
        assert args.chunk_size == 4096

    def test_cli_overrides_config(self):
        args = self._make_args(recursive=False, workers=2, progress=False)
        merge_config_into_args(args, {"recursive": True, "workers": 8, "progress": True})
        assert args.recursive is False
        assert args.workers == 2
        assert args.progress is False

    def test_invalid_values_fall_back(self, caplog):
        args = self._make_args()
        with caplog.at_level(logging.WARNING, logger="dupefinder"):
            merge_config_into_args(args, {"recursive": "yes", "workers": 0, "chunk_size": True})
        assert args.recursive is False
        assert args.workers == 1
        assert args.chunk_size == 64 * 1024
        assert "workers" in caplog.text


class TestCreateConfigInteractive:
    """Test interactive config creation."""

    def test_writes_answers(self, tmp_path):
        answers = iter(["true", "", "false", "3", ""])
        messages = []
        path = create_config_interactive(
            tmp_path, input_fn=lambda prompt: next(answers), print_fn=messages.append,
        )
        cfg = load_config(tmp_path)
        assert path == tmp_path / CONFIG_FILENAME
        assert cfg == {
            "recursive": True,
            "skip_empty": False,
            "progress": False,
            "workers": 3,
            "chunk_size": 64 * 1024,
        }
        assert "Configuration saved" in messages[-1]

    def test_keeps_existing_values(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("workers = 6\nrecursive = true\n")
        create_config_interactive(tmp_path, input_fn=lambda prompt: "", print_fn=lambda msg: None)
        cfg = load_config(tmp_path)
        assert cfg["workers"] == 6
        assert cfg["recursive"] is True

    def test_rejects_non_numeric(self, tmp_path):
        answers = iter(["", "", "", "many", ""])
        messages = []
        create_config_interactive(
            tmp_path, input_fn=lambda prompt: next(answers), print_fn=messages.append,
        )
        assert load_config(tmp_path)["workers"] == 1
        assert any("Not a number" in m for m in messages)
